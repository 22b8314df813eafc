"""Root conftest: shared fixtures."""
import pytest

from curvedgeometry.controller.factory import CurveGeometryFactory


@pytest.fixture
def factory() -> CurveGeometryFactory:
    return CurveGeometryFactory()
