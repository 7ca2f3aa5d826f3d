from __future__ import annotations

from typing import Any, Dict, List

import pytest

from phpmatrix.models import ReleaseDescriptor


def _release(name: str, *, future: bool = False, eol: bool = False, secure: bool = False) -> ReleaseDescriptor:
    return ReleaseDescriptor(name=name, is_future=future, is_end_of_life=eol, is_secure=secure)


@pytest.fixture
def php_releases() -> List[ReleaseDescriptor]:
    """PHP 7.2 - 8.5 with realistic lifecycle flags; 8.5 is a future release."""
    return [
        _release("7.2", eol=True),
        _release("7.3", eol=True),
        _release("7.4", eol=True),
        _release("8.0", eol=True),
        _release("8.1", secure=True),
        _release("8.2", secure=True),
        _release("8.3", secure=True),
        _release("8.4", secure=True),
        _release("8.5", future=True),
    ]


@pytest.fixture
def catalog_payload() -> Dict[str, Any]:
    """Catalog document shaped like the remote release service response."""
    return {
        "data": {
            "70400": {
                "id": 70400,
                "name": "7.4",
                "isFutureVersion": False,
                "isEOLVersion": True,
                "isSecureVersion": False,
            },
            "80300": {
                "id": 80300,
                "name": "8.3",
                "isFutureVersion": False,
                "isEOLVersion": False,
                "isSecureVersion": True,
            },
            "80400": {
                "id": 80400,
                "name": "8.4",
                "isFutureVersion": False,
                "isEOLVersion": False,
                "isSecureVersion": True,
            },
            "80500": {
                "id": 80500,
                "name": "8.5",
                "isFutureVersion": True,
                "isEOLVersion": False,
                "isSecureVersion": False,
            },
        }
    }
