"""Core conversion modules.

WHY: The core package contains the stable heart of the converter: the
IR dataclasses, the tokenizer, the fallback transliterator, and the
reassembler, plus the one-shot and live orchestration on top of them.

HOW: ir.py defines the data structures, tokenizer.py splits input text,
fallback.py renders dictionary misses, reassembler.py applies precedence,
converter.py runs one request end to end, live.py debounces edits.

RULES:
- Tokenizer, fallback and reassembler are synchronous and pure
- The only suspension point is the dictionary batch lookup
- No module here talks HTTP directly
"""
