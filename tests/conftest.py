import pytest
from PIL import Image


@pytest.fixture
def make_image(tmp_path):
    """Write an RGBA PNG and return its path. `alpha` is a value or a function of (x, y)."""
    def make(alpha=255, size=(16, 16), name='sprite.png'):
        img = Image.new('RGBA', size)
        for y in range(size[1]):
            for x in range(size[0]):
                a = alpha(x, y) if callable(alpha) else alpha
                img.putpixel((x, y), (255, 255, 255, a))
        path = tmp_path / name
        img.save(path)
        return str(path)
    return make
