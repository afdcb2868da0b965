"""ruamel.yaml emitters for the two output shapes.

Each ``dump`` is a single stream, so a root plain scalar never needs the
``...`` document-end marker the stock emitter adds after it.
"""

from __future__ import annotations

import json
from typing import Any

from ruamel.yaml.emitter import Emitter
from ruamel.yaml.events import StreamEndEvent


class CanonicalEmitter(Emitter):
    """Block or flow YAML without the trailing open-ended marker."""

    def expect_document_start(self, first: bool = False) -> None:
        if isinstance(self.event, StreamEndEvent):
            self.open_ended = False
        super().expect_document_start(first)


class JSONEmitter(CanonicalEmitter):
    """Flow emitter whose double-quoted scalars are JSON string literals.

    YAML escapes such as ``\\x01`` or ``\\e`` are not valid JSON, so every
    double-quoted scalar is written through :func:`json.dumps`.
    """

    def check_simple_key(self) -> bool:
        # keys are always quoted strings here, so "?" complex keys never apply
        return True

    def choose_scalar_style(self) -> Any:
        if self.event.style == '"':
            return '"'
        return super().choose_scalar_style()

    def write_double_quoted(self, text: Any, split: Any = True) -> None:
        self.write_indicator(json.dumps(text, ensure_ascii=False), True)
