from PIL import Image


def read_grayscale_pixels(path: str) -> tuple[bytes, int, int]:
    """Return the row-major intensity bytes of an image plus its size."""
    with Image.open(path) as im:
        im = im.convert("L")  # ensure grayscale
        return im.tobytes(), im.width, im.height


def write_grayscale_pixels(path: str, pixels: bytes, width: int, height: int) -> None:  # noqa
    if len(pixels) != width * height:
        raise ValueError(f"Expected {width * height} pixels for {width}x{height}, got {len(pixels)}")  # noqa
    Image.frombytes("L", (width, height), pixels).save(path)
