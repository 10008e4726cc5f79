"""Catalog models - bookable services and their option schemas."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from planner.app.models.common import PackageType, ServiceCategory


class AdditiveAdjustment(BaseModel):
    """Fixed amount added to the running total (negative for a discount)."""

    kind: Literal["additive"] = "additive"
    amount: float


class DoublingAdjustment(BaseModel):
    """Doubles the running total (round-trip style options)."""

    kind: Literal["doubling"] = "doubling"


class ThresholdTieredAdjustment(BaseModel):
    """Per-unit surcharge for every unit above a free threshold."""

    kind: Literal["threshold_tiered"] = "threshold_tiered"
    threshold: int = Field(..., ge=0)
    per_unit_amount: float


ChoiceAdjustment = Annotated[
    AdditiveAdjustment | DoublingAdjustment, Field(discriminator="kind")
]


class OptionChoice(BaseModel):
    """One selectable value of an enumerated option group."""

    value: str
    label: str
    adjustment: ChoiceAdjustment | None = None


class OptionGroup(BaseModel):
    """Declared option group of a service.

    A group is either enumerated (``choices``) or quantity-based (``tiered``).
    """

    id: str
    label: str
    choices: list[OptionChoice] = Field(default_factory=list)
    tiered: ThresholdTieredAdjustment | None = None

    @model_validator(mode="after")
    def validate_single_kind(self) -> "OptionGroup":
        """Ensure exactly one of choices/tiered is declared."""
        if bool(self.choices) == (self.tiered is not None):
            raise ValueError(f"option group {self.id!r} must declare either choices or tiered")
        values = [c.value for c in self.choices]
        if len(values) != len(set(values)):
            raise ValueError(f"option group {self.id!r} has duplicate choice values")
        return self

    def choice(self, value: str) -> OptionChoice | None:
        """Look up a declared choice by value."""
        for choice in self.choices:
            if choice.value == value:
                return choice
        return None


class OptionSelection(BaseModel):
    """User selection for one option group."""

    group_id: str
    value: str | None = None
    quantity: int | None = None


class ServiceCatalogEntry(BaseModel):
    """Bookable service as declared in the catalog."""

    id: str
    name: str
    base_price: float = Field(..., ge=0)
    duration_slots: int = Field(..., ge=1)
    category: ServiceCategory
    package_types: list[PackageType] = Field(default_factory=lambda: [PackageType.standard])
    option_groups: list[OptionGroup] = Field(default_factory=list)

    @field_validator("option_groups")
    @classmethod
    def validate_unique_groups(cls, v: list[OptionGroup]) -> list[OptionGroup]:
        """Ensure option group ids are unique within a service."""
        ids = [g.id for g in v]
        if len(ids) != len(set(ids)):
            raise ValueError("option group ids must be unique")
        return v
