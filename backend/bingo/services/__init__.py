"""Bingo domain services: patterns, cards, draws and win validation.

Pure in-memory logic owned by the room state machine; nothing here touches
Flask or Socket.IO.
"""
from bingo.services.cards import CardGenerator
from bingo.services.draws import DrawEngine
from bingo.services.patterns import PatternCatalog
from bingo.services.validation import WinValidator

__all__ = ['CardGenerator', 'DrawEngine', 'PatternCatalog', 'WinValidator']
