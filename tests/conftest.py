"""Shared fixtures for the idfactory test suite."""

from __future__ import annotations

import itertools
import re

import pytest

from idfactory.core.coders import Base64UrlCoder, HexCoder, UuidCoder
from idfactory.core.config import IdFactoryConfig
from idfactory.core.factory import IdFactory
from idfactory.core.ids import RandomId


# ---------------------------------------------------------------------------
# Stub collaborators
# ---------------------------------------------------------------------------

_counter = itertools.count()


class StubId:
    """Identifier over a plain string payload."""

    generated = 0
    min_calls = 0
    max_calls = 0

    @classmethod
    def generate(cls) -> StubId:
        cls.generated += 1
        return cls(f"id_{next(_counter)}")

    @classmethod
    def min_sentinel(cls) -> StubId:
        cls.min_calls += 1
        return cls("\x00")

    @classmethod
    def max_sentinel(cls) -> StubId:
        cls.max_calls += 1
        return cls("\xff")

    def __init__(self, value: str) -> None:
        self._bytes = value

    @property
    def bytes(self) -> str:
        return self._bytes


class PrefixCoder:
    """Prepends ``"<prefix> "``; untrusted decode also strips ``<prefix>_distrusted``."""

    def __init__(self, prefix: str) -> None:
        self._prefix = prefix
        self._untrusted = re.compile(rf"^{prefix}(?:_distrusted)? ")
        self._trusted = re.compile(rf"^{prefix} ")

    def encode(self, payload: str) -> str:
        return f"{self._prefix} {payload}"

    def encode_trusted(self, payload: str) -> str:
        return f"{self._prefix} {payload}"

    def decode(self, value: str) -> str:
        return self._untrusted.sub("", value)

    def decode_trusted(self, value: str) -> str:
        return self._trusted.sub("", value)


@pytest.fixture
def stub_id_type() -> type[StubId]:
    """StubId with its call counters reset."""
    StubId.generated = 0
    StubId.min_calls = 0
    StubId.max_calls = 0
    return StubId


@pytest.fixture
def stub_config(stub_id_type) -> IdFactoryConfig:
    return IdFactoryConfig(
        id=stub_id_type,
        canonical_coder=PrefixCoder("canonical"),
        raw_coder=PrefixCoder("raw"),
    )


@pytest.fixture
def stub_factory(stub_config) -> IdFactory:
    """Factory over StubId with prefix-stripping coders."""
    return IdFactory(stub_config)


# ---------------------------------------------------------------------------
# Built-in collaborators
# ---------------------------------------------------------------------------

@pytest.fixture
def random_factory() -> IdFactory:
    """Factory over RandomId with uuid canonical and hex raw forms."""
    return IdFactory(
        IdFactoryConfig(id=RandomId, canonical_coder=UuidCoder(), raw_coder=HexCoder())
    )


@pytest.fixture
def sample_payload() -> bytes:
    return bytes(range(16))


@pytest.fixture(params=[HexCoder, UuidCoder, Base64UrlCoder], ids=lambda c: c.name)
def coder(request):
    return request.param()


@pytest.fixture
def prefix_coder_cls() -> type[PrefixCoder]:
    return PrefixCoder
