"""Exception types raised by modal-harmony.

Strict parsers raise these; the sentinel variants used at the presentation
boundary (``note_index``, ``parse_chord``, ``roman_numeral``) return ``None``
instead.
"""


class ModalHarmonyError(Exception):
    """Base class for all modal-harmony errors."""


class NoteLookupError(ModalHarmonyError, LookupError, ValueError):
    """A note name does not resolve to one of the 12 pitch classes."""


class ChordLookupError(ModalHarmonyError, LookupError, ValueError):
    """A chord symbol does not resolve to one of the 36 supported triads."""


class ModeLookupError(ModalHarmonyError, KeyError):
    """A mode name is not in the mode catalog."""


class AudioUnavailableError(ModalHarmonyError, RuntimeError):
    """The audio output device could not be acquired."""
