"""
Pytest configuration and shared fixtures for kaiblock tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

make_items = _common.make_items
make_leaves = _common.make_leaves
make_tree = _common.make_tree
make_keypair = _common.make_keypair
tamper_proof = _common.tamper_proof


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def items():
    """Provide five distinct byte items."""
    return make_items(5)


@pytest.fixture
def abc_tree():
    """Provide the three-leaf tree over a, b, c."""
    return make_tree([b"a", b"b", b"c"])


@pytest.fixture
def keypair():
    """Provide a deterministic Ed25519 keypair."""
    return make_keypair()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove KAIBLOCK_* variables so configuration tests see defaults."""
    import os
    for name in list(os.environ):
        if name.startswith("KAIBLOCK_"):
            monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def reset_default_config():
    """Reset the process-wide default RuntimeConfig around a test."""
    from kaiblock.config import set_default_config
    set_default_config(None)
    yield
    set_default_config(None)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


# =============================================================================
# Test Helpers (available to all tests via fixtures)
# =============================================================================

@pytest.fixture
def assert_proof_valid():
    """Helper to assert a proof verifies against a root."""
    from kaiblock.merkle import verify_merkle_proof

    def _assert(proof, root):
        assert verify_merkle_proof(proof, root), (
            f"Proof for leaf {proof.leaf_index} did not verify against {root.to_hex()}"
        )
    return _assert


@pytest.fixture
def assert_proof_invalid():
    """Helper to assert a proof is rejected."""
    from kaiblock.merkle import verify_merkle_proof

    def _assert(proof, root):
        assert not verify_merkle_proof(proof, root), (
            f"Proof for leaf {proof.leaf_index} unexpectedly verified"
        )
    return _assert
