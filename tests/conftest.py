from __future__ import annotations

import logging

import pytest

SAMPLE_CONFIG = """api_key: test_api_key_12345
model: gpt-4o-mini
prompts:
- name: test1
  prompt: This is test prompt 1
- name: test2
  prompt: >
    This is a multi-line
    test prompt 2
- name: CaseSensitive
  prompt: Case test prompt
"""


@pytest.fixture
def home(tmp_path, monkeypatch):  # type: ignore[no-untyped-def]
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("PIPELLM_CONFIG", raising=False)
    return tmp_path


@pytest.fixture
def write_config(home):  # type: ignore[no-untyped-def]
    def _write(content: str = SAMPLE_CONFIG):  # type: ignore[no-untyped-def]
        path = home / ".pipellm.yaml"
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def root_logger():  # type: ignore[no-untyped-def]
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield root
    root.handlers = saved_handlers
    root.setLevel(saved_level)
