"""
六爻解卦模块
"""
from .models import ApiResponse, DivinationResult, InterpretationRequest, SymbolRecord
from .engine import HexagramEngine
from .service import LiuyaoService
from .store import InMemoryRecordStore, RecordStore

__all__ = [
    'ApiResponse',
    'DivinationResult',
    'InterpretationRequest',
    'SymbolRecord',
    'HexagramEngine',
    'LiuyaoService',
    'InMemoryRecordStore',
    'RecordStore'
]
