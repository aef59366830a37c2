#!/usr/bin/python

# small script to turn 16x16 sprite images into arrays of 16-bit row masks
# usage: python sprite_to_bitmap.py [-n <C array name>] <image file>

import argparse
import logging
import os
import sys
from collections import namedtuple

import numpy
from PIL import Image

SPRITE_SIZE = 16

# pixels with an alpha value below this are 'off'
ALPHA_THRESHOLD = 128

logger = logging.getLogger("sprite_to_bitmap")

ConversionResult = namedtuple('ConversionResult', ['name', 'rows'])


class SpriteError(Exception):
    pass


class NotFound(SpriteError):
    def __init__(self, path):
        super().__init__(f"File not found at '{path}'")
        self.path = path


class DecodeError(SpriteError):
    def __init__(self, path, message):
        super().__init__(f"could not decode '{path}': {message}")
        self.path = path
        self.message = message


class SizeMismatch(SpriteError):
    def __init__(self, width, height):
        super().__init__(
            f'Image must be exactly {SPRITE_SIZE}x{SPRITE_SIZE} pixels.\n'
            f'Image size is currently {width}x{height}.'
        )
        self.width = width
        self.height = height


def decode_rgba(path):
    """
    Load an image file into an array of shape (height, width, 4) holding
    8-bit RGBA values. Only the first frame of animated files is read.
    """
    try:
        with Image.open(path) as img:
            logger.debug('decoded %s: %dx%d, mode %s', path, img.width, img.height, img.mode)
            return numpy.asarray(img.convert('RGBA'))
    except Exception as e:
        raise DecodeError(path, str(e) or type(e).__name__) from e


def row_mask(bits):
    # leftmost pixel ends up as the most significant bit
    mask = 0
    for bit in bits:
        mask = (mask << 1) | int(bool(bit))
    return mask


def convert(path, decode=decode_rgba):
    if not os.path.isfile(path):
        raise NotFound(path)

    logger.debug('converting %s', path)
    pixels = decode(path)

    height, width = pixels.shape[:2]
    if width != SPRITE_SIZE or height != SPRITE_SIZE:
        raise SizeMismatch(width, height)

    on = pixels[:, :, 3] >= ALPHA_THRESHOLD
    rows = tuple(row_mask(row) for row in on)
    return ConversionResult(os.path.basename(path), rows)


def array_name(text):
    name = ''.join(c if c.isascii() and (c.isalnum() or c == '_') else '_' for c in text)
    if not name:
        return 'sprite'
    if name[0].isdigit():
        name = '_' + name
    return name


def render(result, name=None):
    if name is None:
        name = os.path.splitext(result.name)[0]
    name = array_name(name)

    lines = [
        f'// Sprite generated from: {result.name}',
        f'// {SPRITE_SIZE}x{SPRITE_SIZE} sprite definition, one {SPRITE_SIZE}-bit row mask per line.',
        f'const uint16_t {name}[{len(result.rows)}] = {{',
    ]
    for i, mask in enumerate(result.rows):
        sep = ',' if i < len(result.rows) - 1 else ''
        lines.append(f'    0b{mask:0{SPRITE_SIZE}b}{sep}')
    lines.append('};')
    return '\n'.join(lines) + '\n'


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='sprite-to-bitmap',
        description=f'Turn a {SPRITE_SIZE}x{SPRITE_SIZE} image into an array of {SPRITE_SIZE}-bit row masks.',
    )
    parser.add_argument('image', nargs='?', help=f'path to a {SPRITE_SIZE}x{SPRITE_SIZE} image file')
    parser.add_argument('-n', '--name', type=str, required=False, help="The name of the array. Default: image filename with only C identifier characters")
    parser.add_argument('-v', '--verbose', action='store_true', help="Print debug output to stderr")
    args = parser.parse_args(argv)

    logging.basicConfig()
    logger.setLevel(logging.DEBUG if args.verbose else logging.WARNING)

    if args.image is None:
        parser.print_usage(sys.stdout)
        print(f'Example: {parser.prog} ./pixil-frame-0.png')
        return 0

    try:
        result = convert(args.image)
    except SpriteError as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1

    print(render(result, args.name), end='')
    return 0


if __name__ == '__main__':
    sys.exit(main())
