"""
Tests for the gymnasium environment, adapter and factory.
"""

import numpy as np
import pytest

from formulatower.environment import (
    Environment,
    FormulaTowerEnv,
    GymAdapter,
    create_environment,
    list_registered_environments,
    register_environment,
)
from formulatower.game import GameConfig, Phase


def make_env(**kwargs):
    config = kwargs.pop("config", GameConfig(target_count=3, target_policy="uniform"))
    return FormulaTowerEnv(config=config, **kwargs)


def answer_for(target):
    return f"1+{target - 1}"


class TestFormulaTowerEnv:

    def test_reset_observation(self):
        env = make_env()
        obs, info = env.reset(seed=0)
        assert env.observation_space.contains(obs)
        assert obs["pool"].sum() == 100
        assert obs["time_left"][0] == 300
        assert 10 <= obs["target"][0] <= 100
        assert info["phase"] == "playing"

    def test_reset_is_seeded(self):
        env = make_env()
        a, _ = env.reset(seed=5)
        b, _ = env.reset(seed=5)
        assert a["target"][0] == b["target"][0]

    def test_correct_answer(self):
        env = make_env()
        obs, _ = env.reset(seed=0)
        target = int(obs["target"][0])
        obs, reward, terminated, truncated, info = env.step(answer_for(target))
        assert reward == 1.0
        assert info["is_correct"]
        assert not terminated and not truncated
        assert obs["pool"][0] == 0
        assert obs["pool"][target - 2] == 0
        assert obs["pool"].sum() == 98
        assert info["round"] == 2
        assert not info["awaiting_advance"]

    def test_wrong_answer(self):
        env = make_env()
        obs, _ = env.reset(seed=0)
        target = int(obs["target"][0])
        wrong = "2+3" if target != 5 else "2+4"
        obs, reward, terminated, _, info = env.step(wrong)
        assert reward == 0.0
        assert info["valid"] and not info["is_correct"]
        assert obs["time_left"][0] == 280
        assert obs["pool"].sum() == 100

    def test_invalid_expression(self):
        env = make_env()
        env.reset(seed=0)
        obs, reward, terminated, _, info = env.step("-1+2")
        assert reward == -0.5
        assert not info["valid"]
        assert "Unary" in info["message"]
        assert obs["time_left"][0] == 300
        assert obs["pool"].sum() == 100

    def test_custom_invalid_penalty(self):
        env = make_env(invalid_penalty=-2.0)
        env.reset(seed=0)
        assert env.step("")[1] == -2.0

    def test_episode_ends_after_last_round(self):
        env = make_env()
        obs, _ = env.reset(seed=1)
        used = set()
        terminated = False
        rounds = 0
        while not terminated:
            target = int(obs["target"][0])
            # Pick a fresh pair a + b = target
            a = next(a for a in range(1, target) if a not in used and (target - a) not in used and a != target - a and target - a <= 100)
            used.update((a, target - a))
            obs, reward, terminated, _, _ = env.step(f"{a}+{target - a}")
            assert reward == 1.0
            rounds += 1
        assert rounds == 3
        assert env.session.phase is Phase.OVER
        assert obs["target"][0] == 0
        with pytest.raises(RuntimeError, match="reset"):
            env.step("1+2")

    def test_seconds_per_step_runs_clock(self):
        env = make_env(config=GameConfig(base_time=10, target_count=3, target_policy="uniform"), seconds_per_step=4)
        env.reset(seed=0)
        _, _, terminated, _, info = env.step("x")
        assert info["time_left"] == 6
        env.step("x")
        _, _, terminated, _, info = env.step("x")
        assert terminated
        assert info["phase"] == "over"

    def test_setup_removals_option(self):
        env = make_env()
        obs, info = env.reset(seed=0, options={"removals": 3})
        assert len(info["removed"]) == 3
        assert obs["pool"].sum() == 97
        assert obs["time_left"][0] == 390

    def test_step_before_reset(self):
        with pytest.raises(RuntimeError):
            make_env().step("1+2")

    def test_render_ansi(self):
        env = make_env(render_mode="ansi")
        env.reset(seed=0)
        text = env.render()
        assert "Round 1/3" in text
        assert len(text.splitlines()) == 11

    def test_render_marks_used_numbers(self):
        env = make_env(render_mode="ansi")
        obs, _ = env.reset(seed=0)
        env.step(answer_for(int(obs["target"][0])))
        first_row = env.render().splitlines()[1].split()
        assert first_row[0] == "."

    def test_invalid_render_mode(self):
        with pytest.raises(ValueError):
            make_env(render_mode="rgb_array")

    def test_action_space_sample_is_string(self):
        env = make_env()
        env.action_space.seed(0)
        assert isinstance(env.action_space.sample(), str)


class TestFactory:

    def test_create_registered(self):
        env = create_environment("formula-tower", config=GameConfig(target_count=2, target_policy="uniform"))
        assert isinstance(env, GymAdapter)
        obs, info = env.reset(seed=0)
        target = int(obs["target"][0])
        result = env.step(answer_for(target))
        assert result["reward"] == 1.0
        assert set(result) == {"observation", "reward", "terminated", "truncated", "info", "summary"}
        assert result["summary"]["correct"] == 1
        assert result["summary"]["round"] == 2
        assert result["summary"]["used"] == 2
        assert env.session is env.env.unwrapped.session
        env.close()

    def test_registry_listing(self):
        assert "formula-tower" in list_registered_environments()

    def test_register_custom(self):
        register_environment("Tiny-Tower", lambda **kw: GymAdapter("FormulaTower-v0", config=GameConfig(target_count=1), **kw))
        env = create_environment("tiny-tower")
        assert env.env.unwrapped.config.target_count == 1

    def test_passthrough_instance(self):
        env = create_environment("formula-tower")
        assert create_environment(env) is env
        with pytest.raises(ValueError):
            create_environment(env, seed=1)

    def test_rejects_non_environment(self):
        with pytest.raises(TypeError):
            create_environment(42)

    def test_clone_is_independent(self):
        env = create_environment("formula-tower")
        clone = env.clone()
        assert isinstance(clone, Environment)
        assert clone.env is not env.env

    def test_adapter_before_reset(self):
        env = create_environment("formula-tower")
        assert env.session is None
        assert env.summary() == {}

    def test_adapter_reset_with_removals(self):
        env = create_environment("formula-tower")
        _, info = env.reset(seed=0, options={"removals": 2})
        assert len(info["removed"]) == 2
        assert env.summary()["removed"] == 2
        assert env.session.time_left == 360

    def test_environment_is_abstract(self):
        with pytest.raises(TypeError):
            Environment()
