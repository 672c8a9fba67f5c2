"""Functional primitives for underbar.

Collection helpers live in ``collections``, mapping merge helpers in
``objects`` and function decorators in ``decorators``. Collection helpers are
stateless; decorators keep private state inside the closures they return.
"""
