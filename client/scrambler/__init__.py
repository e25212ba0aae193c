"""Client-side orchestration for B-roll scrambler jobs."""

from scrambler.core.settings import CLIENT_VERSION

__version__ = CLIENT_VERSION
