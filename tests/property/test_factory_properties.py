"""Property tests: factory round trips and untrusted decode totality.

Uses hypothesis to check that any 16-byte payload survives a trip
through either serialized form, and that untrusted decoding either
yields a 16-byte payload or raises DecodeError, never anything else.
"""

from hypothesis import given, settings, strategies as st

from idfactory.core.coders import CODERS
from idfactory.core.config import IdFactoryConfig
from idfactory.core.errors import DecodeError
from idfactory.core.factory import IdFactory
from idfactory.core.ids import RandomId

payloads = st.binary(min_size=16, max_size=16)
coder_names = st.sampled_from(sorted(CODERS))


def _factory(canonical: str, raw: str) -> IdFactory:
    return IdFactory(
        IdFactoryConfig(
            id=RandomId,
            canonical_coder=CODERS[canonical](),
            raw_coder=CODERS[raw](),
        )
    )


@given(payload=payloads, canonical=coder_names, raw=coder_names)
@settings(max_examples=200)
def test_serialized_forms_round_trip(payload, canonical, raw):
    """Both forms decode back to the same payload on both paths."""
    factory = _factory(canonical, raw)
    ident = factory.decorate(RandomId(payload))

    assert factory.from_canonical(ident.to_canonical()) == ident
    assert factory.from_canonical_trusted(ident.to_canonical()) == ident
    assert factory.from_raw(ident.to_raw()) == ident
    assert factory.from_raw_trusted(ident.to_raw()) == ident


@given(text=st.text(max_size=64), name=coder_names)
@settings(max_examples=300)
def test_untrusted_decode_is_total(text, name):
    """Arbitrary text decodes to 16 bytes or raises DecodeError."""
    factory = _factory(name, name)
    try:
        ident = factory.from_raw(text)
    except DecodeError:
        return
    assert len(ident.bytes) == 16


@given(payload=payloads)
def test_any_id_sorts_between_sentinels(payload):
    factory = _factory("uuid", "hex")
    ident = factory.decorate(RandomId(payload))
    assert factory.min_sentinel() <= ident <= factory.max_sentinel()
