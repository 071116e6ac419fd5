"""A source of fresh random integers under ``random.*`` keys."""

from __future__ import annotations

import secrets

from confstack.memory import ConfigSourceBuilder
from confstack.source import ConfigSource
from confstack.value import RandValue, to_config_value


class RandomSource(ConfigSource):
    """Offers ``random.u8`` to ``random.isize``; each read gives a new value."""

    def __init__(self) -> None:
        self.name = "random_generator"

    def load(self, builder: ConfigSourceBuilder) -> None:
        for kind in RandValue:
            builder.set(f"random.{kind.value}", kind)


def normalize(rand_value: RandValue) -> int | str:
    """Draw a random integer of the given kind as a storable value.

    Integers beyond the signed 64-bit range come back as text.
    """
    bounds = rand_value.range
    bits = (bounds.maximum - bounds.minimum + 1).bit_length() - 1
    return to_config_value(bounds.minimum + secrets.randbits(bits))