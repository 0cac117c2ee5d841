from PIL import Image

from gifframes import PillowCodec


def test_copy_clips_to_the_target():
    codec = PillowCodec()
    target = codec.blank_canvas(10, 10)
    source = Image.new("RGBA", (10, 10), (255, 0, 0, 255))
    codec.copy(target, source, (6, 7), (0, 0, 10, 10), (10, 10))

    assert target.getpixel((5, 7))[3] == 0
    assert target.getpixel((6, 7)) == (255, 0, 0, 255)
    assert target.getpixel((9, 9)) == (255, 0, 0, 255)


def test_copy_outside_the_target_is_a_no_op():
    codec = PillowCodec()
    target = codec.blank_canvas(4, 4)
    source = Image.new("RGBA", (4, 4), (255, 0, 0, 255))
    codec.copy(target, source, (4, 0), (0, 0, 4, 4), (4, 4))
    assert target.getextrema()[3] == (0, 0)


def test_copy_resamples_to_the_target_size():
    codec = PillowCodec()
    target = codec.blank_canvas(8, 8)
    source = Image.new("RGBA", (2, 2), (0, 0, 255, 255))
    codec.copy(target, source, (0, 0), (0, 0, 2, 2), (8, 8))
    assert target.getpixel((4, 4)) == (0, 0, 255, 255)


def test_blended_copy_keeps_what_is_under_transparent_pixels():
    codec = PillowCodec()
    target = Image.new("RGBA", (2, 1), (0, 255, 0, 255))
    source = Image.new("RGBA", (2, 1), (0, 0, 0, 0))
    source.putpixel((1, 0), (255, 0, 0, 255))
    codec.copy(target, source, (0, 0), (0, 0, 2, 1), (2, 1))
    assert target.getpixel((0, 0)) == (0, 255, 0, 255)
    assert target.getpixel((1, 0)) == (255, 0, 0, 255)

    codec.copy(target, source, (0, 0), (0, 0, 2, 1), (2, 1), blend=False)
    assert target.getpixel((0, 0)) == (0, 0, 0, 0)


def test_transparent_color():
    codec = PillowCodec()
    paletted = Image.new("P", (2, 2))
    paletted.putpalette([10, 20, 30, 40, 50, 60])
    assert codec.transparent_color(paletted) is None
    paletted.info["transparency"] = 1
    assert codec.transparent_color(paletted) == (40, 50, 60)
    #Index past the palette
    paletted.info["transparency"] = 300
    assert codec.transparent_color(paletted) is None

    gray = Image.new("L", (2, 2))
    gray.info["transparency"] = 7
    assert codec.transparent_color(gray) == (7, 7, 7)


def test_set_transparent_color():
    codec = PillowCodec()
    canvas = codec.blank_canvas(3, 3)
    codec.set_transparent_color(canvas, (1, 2, 3))
    assert canvas.getpixel((2, 2)) == (1, 2, 3, 0)
    assert codec.transparent_color(canvas) == (1, 2, 3)


def test_frame_layer():
    codec = PillowCodec()
    image = Image.new("P", (4, 4), 1)
    image.putpalette([0, 0, 0, 255, 255, 255])
    image.info["transparency"] = 0
    image.putpixel((2, 2), 0)
    layer = codec.frame_layer(image, (1, 1, 3, 3))
    assert layer.size == (2, 2)
    assert layer.mode == "RGBA"
    assert layer.getpixel((0, 0)) == (255, 255, 255, 255)
    assert layer.getpixel((1, 1))[3] == 0
