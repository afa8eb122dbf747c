"""
Playoff System

Playoff seeding, bracket rounds and survivor filtering.
"""

from .playoff_seeder import PlayoffSeeder
from .seeding_models import PlayoffSeeding, ConferenceSeeding, PlayoffSeed
from .playoff_manager import PlayoffManager
from .bracket_models import PlayoffRound, PlayoffBracket
from .playoff_exceptions import (
    PlayoffException,
    InvalidRoundException,
    InvalidSeedingException,
    InvalidBracketException,
    ExceptionSeverity,
    RecoveryStrategy,
)

__all__ = [
    'PlayoffSeeder',
    'PlayoffSeeding',
    'ConferenceSeeding',
    'PlayoffSeed',
    'PlayoffManager',
    'PlayoffRound',
    'PlayoffBracket',
    'PlayoffException',
    'InvalidRoundException',
    'InvalidSeedingException',
    'InvalidBracketException',
    'ExceptionSeverity',
    'RecoveryStrategy',
]
