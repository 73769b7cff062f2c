"""
Data model for prizes, ticket layouts and hands.

Catalog entries accept both snake_case field names and the camelCase keys
used by older persisted layout files.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import List, Optional, Union

import pytz
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class CatalogModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ==================== Vocabularies ====================

class RevealMechanic(str, Enum):
    """How prize information is shown per area. Display only."""

    INDEPENDENT = "independent"
    # Deprecated: kept for reading old layouts
    REVEAL_ALL = "reveal-all"
    REVEAL_ONE = "reveal-one"
    MATCH_THREE = "match-three"
    MATCH_TWO = "match-two"
    PROGRESSIVE = "progressive"

    @property
    def is_deprecated(self) -> bool:
        return self is not RevealMechanic.INDEPENDENT


class WinCondition(str, Enum):
    NO_WIN_CONDITION = "no-win-condition"
    MATCH_TWO = "match-two"
    MATCH_THREE = "match-three"
    MATCH_ALL = "match-all"
    FIND_ONE = "find-one"
    FIND_ONE_DYNAMIC = "find-one-dynamic"
    TOTAL_VALUE_THRESHOLD = "total-value-threshold"
    # Deprecated: kept for reading old layouts
    REVEAL_ALL_AREAS = "reveal-all-areas"
    REVEAL_ANY_AREA = "reveal-any-area"
    MATCH_SYMBOLS = "match-symbols"
    PROGRESSIVE_REVEAL = "progressive-reveal"

    @property
    def is_deprecated(self) -> bool:
        return self in DEPRECATED_WIN_CONDITIONS


DEPRECATED_WIN_CONDITIONS = frozenset({
    WinCondition.REVEAL_ALL_AREAS,
    WinCondition.REVEAL_ANY_AREA,
    WinCondition.MATCH_SYMBOLS,
    WinCondition.PROGRESSIVE_REVEAL,
})


class TicketType(str, Enum):
    CORE = "Core"
    HAND = "Hand"


class StateValueOperation(str, Enum):
    ADD = "add"
    SUBTRACT = "subtract"
    SET = "set"
    MULTIPLY = "multiply"


class HandEffectOperation(str, Enum):
    MULTIPLY = "multiply"
    ADD = "add"
    SUBTRACT = "subtract"
    SET = "set"
    DIFF = "diff"


class HandEffectTarget(str, Enum):
    SELF = "self"
    PRIOR = "prior"
    NEXT = "next"
    HAND = "hand"


class ConditionType(str, Enum):
    GREATER = "greater"
    LESS = "less"
    EQUAL = "equal"


# ==================== Prizes ====================

class StateEffect(CatalogModel):
    field: str
    operation: StateValueOperation
    value: Union[float, str, List[str]]


class HandEffectCondition(CatalogModel):
    """One branch of a diff effect, applied when prior - next matches `type`."""

    type: ConditionType
    target: HandEffectTarget
    operation: HandEffectOperation
    amount: float = Field(default=0, allow_inf_nan=False)

    @field_validator("operation")
    @classmethod
    def _no_nested_diff(cls, value):
        if value == HandEffectOperation.DIFF:
            raise ValueError("diff cannot be nested inside a diff condition")
        return value


class HandEffect(CatalogModel):
    operation: HandEffectOperation
    target: HandEffectTarget = HandEffectTarget.SELF
    amount: float = Field(default=0, allow_inf_nan=False)
    conditions: List[HandEffectCondition] = Field(default_factory=list)

    @model_validator(mode="after")
    def _conditions_only_for_diff(self):
        if self.conditions and self.operation != HandEffectOperation.DIFF:
            raise ValueError("conditions are only allowed on diff effects")
        return self


class PrizeEffect(CatalogModel):
    state_effects: List[StateEffect] = Field(default_factory=list)
    achievement_id: Optional[str] = None
    hand_effect: Optional[HandEffect] = None


class Prize(CatalogModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    value: str
    emoji: str
    effects: Optional[PrizeEffect] = None


class PrizeConfig(CatalogModel):
    prize_id: str
    weight: float = Field(allow_inf_nan=False)


# ==================== Layouts ====================

class ScratchAreaConfig(CatalogModel):
    id: str
    top_percent: float = 0
    left_percent: float = 0
    width_percent: float = 1
    height_percent: float = 1
    canvas_width: int = 400
    canvas_height: int = 270
    reveal_threshold: float = 50


class BetOption(CatalogModel):
    order: int
    bet_amount: int
    description: str = ""
    min_prize_threshold: float = Field(default=0, allow_inf_nan=False)
    win_multiplier: float = Field(default=1, allow_inf_nan=False)
    is_refundable: bool = False
    badge: Optional[str] = None


class BettingConfig(CatalogModel):
    enabled: bool = True
    bet_options: List[BetOption] = Field(default_factory=list)
    insufficient_funds_message: Optional[str] = None


class TicketLayout(CatalogModel):
    id: str
    name: str = ""
    description: str = ""
    type: TicketType = TicketType.CORE
    scratch_areas: List[ScratchAreaConfig]
    reveal_mechanic: RevealMechanic = RevealMechanic.INDEPENDENT
    win_condition: WinCondition
    ticket_width: int = 500
    ticket_height: int = 300
    background_image: Optional[str] = None
    gold_cost: Optional[int] = None
    prize_configs: List[PrizeConfig] = Field(default_factory=list)
    target_prize_id: Optional[str] = None
    value_threshold: Optional[float] = Field(default=None, allow_inf_nan=False)
    winning_symbol_area_id: Optional[str] = None
    betting_config: Optional[BettingConfig] = None

    @field_validator("scratch_areas")
    @classmethod
    def _unique_area_ids(cls, areas):
        seen = set()
        for area in areas:
            if area.id in seen:
                raise ValueError(f"duplicate scratch area id '{area.id}'")
            seen.add(area.id)
        return areas

    @property
    def area_ids(self) -> List[str]:
        return [area.id for area in self.scratch_areas]


# ==================== Hands ====================

def _utcnow() -> datetime:
    return datetime.now(pytz.utc)


class HandTicket(CatalogModel):
    layout_id: str
    prize_id: str
    gold_value: int = Field(ge=0)
    added_at: datetime = Field(default_factory=_utcnow)
    hand_effect: Optional[HandEffect] = None


class Hand(CatalogModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    tickets: List[HandTicket] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_utcnow)


class TicketCalculation(BaseModel):
    """How one hand ticket's effect resolved, for display next to the ticket."""

    index: int
    layout_id: str
    prize_id: str
    base_value: int
    complete: bool
    calculated_value: int
    applied_effect: Optional[HandEffect] = None
    notes: Optional[str] = None


class HandResult(BaseModel):
    total_value: int
    tickets: List[TicketCalculation] = Field(default_factory=list)
