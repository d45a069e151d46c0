import pytest
from PIL import Image

from autotiler.autotile import Autotile
from autotiler.placeholder import generate_placeholder_sheet


@pytest.fixture
def sheet() -> Image.Image:
    return generate_placeholder_sheet(seed=7)


@pytest.fixture
def autotile(sheet: Image.Image) -> Autotile:
    at = Autotile(sheet, "grass", id="at-1", src="<memory>")
    at.compile()
    return at
