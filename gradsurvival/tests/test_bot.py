"""
Tests for bot action selection.

Tests:
- Bots only select catalog actions
- Cautious policy recovers low stats
- Autoplayed games end
"""

import random

import pytest

from ..bots import BotPolicy, CautiousPolicy, POLICIES, RandomPolicy, run_game
from ..engine_core.state import TerminalStatus
from ..engine_core.turn_processor import TurnProcessor


class TestBotActionLegality:
    """Tests that bots only select catalog actions."""

    def test_random_bot_selects_catalog_actions(self, fresh_session, rules):
        bot = RandomPolicy(seed=42)
        for _ in range(20):
            decision = bot.select_action(fresh_session, rules.actions.ids)
            assert decision.action_id in rules.actions

    def test_random_bot_seeded(self, fresh_session, rules):
        picks_a = [RandomPolicy(seed=1).select_action(fresh_session, rules.actions.ids).action_id]
        picks_b = [RandomPolicy(seed=1).select_action(fresh_session, rules.actions.ids).action_id]
        assert picks_a == picks_b

    def test_random_bot_needs_actions(self, fresh_session):
        with pytest.raises(ValueError):
            RandomPolicy().select_action(fresh_session, [])

    def test_policies_registry(self):
        assert set(POLICIES) == {"random", "cautious"}
        for policy_cls in POLICIES.values():
            assert issubclass(policy_cls, BotPolicy)


class TestCautiousPolicy:
    """Tests for CautiousPolicy."""

    @pytest.mark.parametrize(
        "stats,expected",
        [
            ({"health": 10}, "sleep"),
            ({"mental": 10}, "rest"),
            ({"advisor_favor": 10}, "meetAdvisor"),
            ({"money": 1000}, "partTimeJob"),
            ({}, "writePaper"),
        ],
    )
    def test_recovery(self, make_session, rules, stats, expected):
        decision = CautiousPolicy().select_action(make_session(**stats), rules.actions.ids)
        assert decision.action_id == expected

    def test_health_first(self, make_session, rules):
        session = make_session(health=10, money=1000)
        decision = CautiousPolicy().select_action(session, rules.actions.ids)
        assert decision.action_id == "sleep"
        assert "health" in decision.explanation

    def test_name(self):
        assert CautiousPolicy().get_name() == "CautiousPolicy"


class TestRunGame:
    """Tests for run_game."""

    def test_random_game_ends(self, rules):
        processor = TurnProcessor(rules=rules, rng=random.Random(5))
        record = run_game(RandomPolicy(seed=5), processor, max_turns=5000)
        assert record.session.is_terminal
        assert record.turns == len(record.actions)
        assert record.outcome != TerminalStatus.ACTIVE

    def test_turn_cap(self, rules):
        processor = TurnProcessor(rules=rules, rng=random.Random(5))
        record = run_game(CautiousPolicy(), processor, max_turns=3)
        assert record.turns <= 3
        assert record.session.total_days == record.turns
