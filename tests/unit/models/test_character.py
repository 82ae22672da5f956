"""Tests for character models."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError

from mesa_engine.models import CharacterSheet, GameSystem, HitPoints, SkillState


class TestHitPoints:
    """Tests for the HitPoints value."""

    def test_valid_pool(self) -> None:
        """Test a pool within bounds."""
        hp = HitPoints(current=7, max=10)
        assert hp.missing == 3
        assert hp.is_down is False

    @pytest.mark.parametrize(
        ("current", "maximum"),
        [(-1, 10), (11, 10), (0, 0)],
    )
    def test_invalid_pool(self, current: int, maximum: int) -> None:
        """Test pools that violate 0 <= current <= max, max >= 1."""
        with pytest.raises(ValidationError):
            HitPoints(current=current, max=maximum)

    def test_is_frozen(self) -> None:
        """Test direct assignment is refused."""
        hp = HitPoints(current=5, max=10)
        with pytest.raises(ValidationError):
            hp.current = 20  # type: ignore[misc]

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(15, 10), (-3, 0), (4, 4)],
    )
    def test_with_current_clamps(self, value: int, expected: int) -> None:
        """Test manual edits clamp into [0, max]."""
        assert HitPoints(current=7, max=10).with_current(value).current == expected

    def test_with_max_pulls_current_down(self) -> None:
        """Test lowering the maximum lowers current hit points."""
        hp = HitPoints(current=9, max=10).with_max(6)
        assert hp == HitPoints(current=6, max=6)

    def test_with_max_floor(self) -> None:
        """Test the maximum never drops below 1."""
        assert HitPoints(current=3, max=10).with_max(0).max == 1


class TestSkillState:
    """Tests for the per-character skill overlay."""

    def test_defaults(self) -> None:
        """Test an absent overlay means not proficient, no bonus."""
        state = SkillState()
        assert state.is_proficient is False
        assert state.extra_bonus == 0


class TestCharacterSheet:
    """Tests for CharacterSheet validation."""

    def test_attribute_labels_uppercased(self, fighter_sheet: Any) -> None:
        """Test attribute keys are normalized."""
        assert fighter_sheet.attributes["FOR"] == 16
        assert "for" not in fighter_sheet.attributes

    def test_system_parsed(self, fighter_sheet: Any) -> None:
        """Test the stored system value maps to the enum."""
        assert fighter_sheet.system is GameSystem.D20_ABILITY

    def test_skill_state_default(self, fighter_sheet: Any) -> None:
        """Test missing skills fall back to the default overlay."""
        assert fighter_sheet.skill_state("stealth") == SkillState()
        assert fighter_sheet.skill_state("perception").extra_bonus == 1

    def test_hit_points_view(self, fighter_sheet: Any) -> None:
        """Test the hit point pool view."""
        assert fighter_sheet.hit_points == HitPoints(current=30, max=44)

    def test_extra_columns_ignored(self) -> None:
        """Test untyped rows with unrelated columns validate."""
        sheet = CharacterSheet.model_validate(
            {"id": "c", "name": "N", "system": "olho_da_morte", "campaign_id": "x"}
        )
        assert sheet.system is GameSystem.D20_CUSTOM

    def test_unknown_system_rejected(self) -> None:
        """Test a system with no profile is rejected at the boundary."""
        with pytest.raises(ValidationError):
            CharacterSheet.model_validate({"id": "c", "name": "N", "system": "gurps"})

    def test_current_above_max_rejected(self) -> None:
        """Test current hit points above the maximum are rejected."""
        with pytest.raises(ValidationError):
            CharacterSheet(id="c", name="N", system=GameSystem.D20_ABILITY, hp_current=12, hp_max=10)
