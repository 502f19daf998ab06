"""Controlled enumerations for the long-game domain.

Every categorical field in the domain MUST reference an enum defined here.
Free-form strings are not acceptable for classification fields.
"""

from __future__ import annotations

from enum import Enum


# ── Board engine ─────────────────────────────────────────────────────────────

class GamePhase(str, Enum):
    """Development phase a board space belongs to."""

    DISCOVERY = "discovery"
    PRECLINICAL = "preclinical"
    CLINICAL = "clinical"
    REGULATORY = "regulatory"


class GameStatus(str, Enum):
    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"
    WON = "won"
    LOST = "lost"


class Difficulty(str, Enum):
    """Board game mode, mirroring the three drug archetypes."""

    ORPHAN = "orphan"
    BLOCKBUSTER = "blockbuster"
    FIRST_IN_CLASS = "firstInClass"


class TokenType(str, Enum):
    """The four categories of scientific evidence."""

    EFFICACY = "efficacy"
    SAFETY = "safety"
    PKPD = "pkpd"
    CMC = "cmc"


class SpecialEffectType(str, Enum):
    RETURN_TO_START = "RETURN_TO_START"
    RETURN_TO_SPACE = "RETURN_TO_SPACE"
    WAIT_TURNS = "WAIT_TURNS"
    CHOICE_REQUIRED = "CHOICE_REQUIRED"
    CAN_UPGRADE = "CAN_UPGRADE"
    VICTORY_CHECK = "VICTORY_CHECK"
    GENERIC_CLOCK = "GENERIC_CLOCK"


class DecisionType(str, Enum):
    SPACE = "space"
    CARD = "card"
    GATE = "gate"
    FINANCING = "financing"


class FinancingType(str, Enum):
    SERIES = "series"
    DILUTION = "dilution"
    PARTNERSHIP = "partnership"
    EMERGENCY = "emergency"


class ShadowStatus(str, Enum):
    """One-way lifecycle of a shadow program: active → failed."""

    ACTIVE = "active"
    FAILED = "failed"


class PolicyCardCategory(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


# ── Path engine ──────────────────────────────────────────────────────────────

class PathTier(str, Enum):
    ORPHAN = "orphan"
    BLOCKBUSTER = "blockbuster"
    FIRST_IN_CLASS = "first-in-class"


class PathModality(str, Enum):
    SMALL_MOLECULE = "small-molecule"
    BIOLOGIC = "biologic"


class PathPhase(str, Enum):
    """Ordered development phases of the path engine."""

    DISCOVERY = "discovery"
    PRECLINICAL = "preclinical"
    PHASE1 = "phase1"
    PHASE2 = "phase2"
    PHASE3 = "phase3"
    APPROVAL = "approval"


class PathEventType(str, Enum):
    SETBACK = "setback"
    OPPORTUNITY = "opportunity"
    CRISIS = "crisis"
    DECISION = "decision"
    NEWS = "news"


class PathStatus(str, Enum):
    """Path game lifecycle.  VICTORY and DEFEAT are absorbing."""

    PATH_SELECTION = "path-selection"
    PLAYING = "playing"
    VICTORY = "victory"
    DEFEAT = "defeat"
