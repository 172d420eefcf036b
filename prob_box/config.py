"""
Probability Object Box — Configuration

Pool defaults come from the environment, optionally seeded from a .env file:

  PROB_BOX_POLICY    relative | absolute        (default: relative)
  PROB_BOX_CAPACITY  positive int               (default: policy ceiling)
  PROB_BOX_SEED      int, seeds the key source  (default: unseeded)
  PROB_BOX_STRICT    1/0, true/false            (default: false)
"""

from __future__ import annotations

import os
from typing import Mapping, Optional

from dotenv import dotenv_values
from pydantic import BaseModel, field_validator

from .domain_types import UpdatePolicy
from .pool import WeightedPool
from .random_source import KeySource

ENV_PREFIX = "PROB_BOX_"


class PoolSettings(BaseModel):
    """Validated construction parameters for a WeightedPool."""

    policy: UpdatePolicy = UpdatePolicy.RELATIVE
    capacity: Optional[int] = None
    seed: Optional[int] = None
    strict: bool = False

    @field_validator("policy", mode="before")
    @classmethod
    def _normalise_policy(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("capacity")
    @classmethod
    def _positive_capacity(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value <= 0:
            raise ValueError(f"capacity must be positive, got {value}")
        return value


def load_settings(
    env_file: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> PoolSettings:
    """
    Read PoolSettings from the environment.

    env_file, when it exists, is read with dotenv_values and sits beneath
    the environment: variables already set in environ win. The process
    environment is never modified. Empty variables count as unset.
    """
    env = dict(os.environ if environ is None else environ)
    if env_file is not None and os.path.exists(env_file):
        file_values = {k: v for k, v in dotenv_values(env_file).items() if v is not None}
        env = {**file_values, **{k: v for k, v in env.items() if v.strip()}}

    raw = {}
    for field in ("policy", "capacity", "seed", "strict"):
        value = env.get(ENV_PREFIX + field.upper(), "")
        if value.strip():
            raw[field] = value.strip()
    return PoolSettings.model_validate(raw)


def create_pool(settings: Optional[PoolSettings] = None) -> WeightedPool:
    """Build a WeightedPool from settings (environment when omitted)."""
    if settings is None:
        settings = load_settings()
    return WeightedPool(
        policy=settings.policy,
        capacity=settings.capacity,
        key_source=KeySource(settings.seed),
        strict=settings.strict,
    )
