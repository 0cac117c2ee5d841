''' Animated GIF frame extraction.
    Walks the block structure of an animated GIF, works out which graphic
    control extension governs which image block and rebuilds every frame as
    a canvas-sized bitmap. Pixel decoding is left to the image codec (Pillow
    by default), this module only moves bytes around.
'''

## Sources cited:
# * w3.org/Graphics/GIF/spec-gif89a.txt
# * matthewflickinger.com/lab/whatsinagif
# * onicos.com/staff/iz/formats/gif.html

#--- Included modules ---
import enum
import logging
import os
import re
from io import BytesIO
from struct import calcsize, unpack

from PIL import Image

logger = logging.getLogger(__name__)

#--- Constants ---
BLOCK_HEADER = 0x21
IMAGE_HEADER = 0x2C
GRAPHIC_HEADER = 0xF9
GRAPHIC_SIZE = 4
COMMENT_HEADER = 0xFE
TEXT_HEADER = 0x1
APPLICATION_HEADER = 0xFF
GIF_HEADER = b"GIF"
GIF_FOOTER = 0x3B

IMAGE_DESCRIPTOR_SIZE = 10
LOOP_APPLICATIONS = (b"NETSCAPE2.0", b"ANIMEXTS1.0")

#Files are checked for animation this many bytes at a time
ANIMATION_CHUNK_SIZE = 100 * 1024

#Graphic control extension directly followed by an image or another extension
ANIMATION_MARKER = re.compile(rb"\x00\x21\xF9\x04.{4}\x00[\x2C\x21]", re.DOTALL)
ANIMATION_MARKER_SIZE = 10

#================================================================
# Error classes
#================================================================
class GifFormatError(RuntimeError):
    '''Raised when invalid format is encountered'''
    pass

class NotAnimatedError(GifFormatError):
    '''Raised when the input is a still GIF or no GIF at all'''
    pass

class TruncatedInputError(GifFormatError):
    '''Raised when a read or seek goes past the available bytes'''
    pass

class MalformedBlockError(GifFormatError):
    '''Raised when a required block signature is missing'''
    pass

#================================================================
# Bit-level operations
#================================================================
def read_bits(byte, start, length):
    '''Read a bit field out of one byte.
    Bit 0 is the most significant bit, as the GIF89a packed field diagrams
    number them.'''
    if start < 0 or length < 1 or start + length > 8:
        raise ValueError("Bit field %d+%d does not fit in a byte" % (start, length))
    return (byte >> (8 - start - length)) & ((1 << length) - 1)

def color_table_size(packed_byte):
    '''Size in bytes of the color table announced by a packed field'''
    return 3 * (2 << read_bits(packed_byte, 5, 3))

#================================================================
# Byte cursors
#================================================================
class ByteCursor(object):
    '''Sequential reader over GIF bytes.
    Subclasses only say how to fetch an absolute byte range, the position
    bookkeeping and the bounds checks live here so that every backing
    store behaves the same.'''

    __slots__ = [
        "_pos",
        "_size",
    ]

    #------------------------------------------------
    # Construction
    #------------------------------------------------
    def __init__(self, size):
        self._pos = 0
        self._size = size

    def _fetch(self, start, length):
        '''Return length bytes starting at the absolute position start'''
        raise NotImplementedError

    #------------------------------------------------
    # Position
    #------------------------------------------------
    @property
    def position(self):
        '''Get the current absolute position'''
        return self._pos

    @property
    def size(self):
        '''Get the total number of bytes'''
        return self._size

    def at_end(self):
        '''Check if every byte has been consumed'''
        return self._pos >= self._size

    def _check(self, start, length):
        if start < 0 or length < 0 or start + length > self._size:
            raise TruncatedInputError("Bytes %d to %d are outside the %d byte input"
                                      % (start, start + length, self._size))

    def seek_forward(self, amount):
        '''Skip amount bytes without reading them'''
        self._check(self._pos, amount)
        self._pos += amount

    def seek_backward(self, amount):
        '''Step back amount bytes'''
        self._check(self._pos - amount, amount)
        self._pos -= amount

    #------------------------------------------------
    # Reading
    #------------------------------------------------
    def read(self, amount):
        '''Read amount bytes from the stream'''
        self._check(self._pos, amount)
        data = self._fetch(self._pos, amount)
        self._pos += amount
        return data

    def read_byte(self):
        '''Read the next byte as an unsigned int'''
        return self.read(1)[0]

    def peek(self, amount):
        '''Read up to amount bytes without moving'''
        return self._fetch(self._pos, min(amount, self._size - self._pos))

    def unpack(self, fmt):
        '''Read a new struct-formatted tuple from stream
        If only one item in tuple, return just the item'''
        ret = unpack(fmt, self.read(calcsize(fmt)))
        if len(ret) == 1:
            return ret[0]
        return ret

    def slice(self, start, length):
        '''Get a byte range at an absolute position, leaving the position alone'''
        self._check(start, length)
        return self._fetch(start, length)

class BufferCursor(ByteCursor):
    '''Cursor over bytes already in memory'''

    __slots__ = [
        "_source",
    ]

    def __init__(self, source):
        if not isinstance(source, (bytes, bytearray, memoryview)):
            raise TypeError("Requires byte-like object")
        self._source = bytes(source)
        super().__init__(len(self._source))

    def _fetch(self, start, length):
        return self._source[start:start + length]

class FileCursor(ByteCursor):
    '''Cursor over a GIF file on disk, use it as a context manager'''

    __slots__ = [
        "_file",
    ]

    def __init__(self, path):
        self._file = open(path, "rb")
        size = self._file.seek(0, os.SEEK_END)
        self._file.seek(0)
        super().__init__(size)

    def _fetch(self, start, length):
        self._file.seek(start)
        data = self._file.read(length)
        if len(data) != length:
            raise TruncatedInputError("File shrank while reading")
        return data

    def close(self):
        '''Close the underlying file'''
        self._file.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
        return False

#================================================================
# Sub-block chains
#================================================================
def block_split(cursor):
    '''Parses through sub-blocks and returns the entire byte string'''
    ret = bytearray()
    block_size = cursor.read_byte()
    while block_size:
        ret += cursor.read(block_size)
        block_size = cursor.read_byte()
    return bytes(ret)

def block_skip(cursor):
    '''Skips over sub-blocks up to and including the terminator'''
    block_size = cursor.read_byte()
    while block_size:
        cursor.seek_forward(block_size)
        block_size = cursor.read_byte()

#================================================================
# Raw blocks
#================================================================
class BlockKind(enum.Enum):
    '''What a captured byte range holds'''
    HEADER = "header"
    GLOBAL_COLOR_TABLE = "global color table"
    GRAPHIC_CONTROL_EXTENSION = "graphic control extension"
    COMMENT_EXTENSION = "comment extension"
    APPLICATION_EXTENSION = "application extension"
    PLAIN_TEXT_EXTENSION = "plain text extension"
    UNKNOWN_EXTENSION = "unknown extension"
    IMAGE_BLOCK = "image block"

EXTENSION_KINDS = {
    GRAPHIC_HEADER: BlockKind.GRAPHIC_CONTROL_EXTENSION,
    COMMENT_HEADER: BlockKind.COMMENT_EXTENSION,
    APPLICATION_HEADER: BlockKind.APPLICATION_EXTENSION,
    TEXT_HEADER: BlockKind.PLAIN_TEXT_EXTENSION,
}

class RawBlock(object):
    '''An exact byte range of the GIF, tagged with what it holds'''

    __slots__ = [
        "_kind",
        "_offset",
        "_data",
    ]

    def __init__(self, kind, offset, data):
        self._kind = kind
        self._offset = offset
        self._data = bytes(data)

    @property
    def kind(self):
        '''Get the block kind'''
        return self._kind

    @property
    def offset(self):
        '''Get the absolute position of the first byte'''
        return self._offset

    @property
    def data(self):
        '''Get the block bytes'''
        return self._data

    def __len__(self):
        return len(self._data)

    def __repr__(self):
        return "RawBlock(%s, offset=%d, length=%d)" % (self._kind.name, self._offset, len(self._data))

#Returned by the scanner on the trailer or at the end of input
END_OF_STREAM = object()

#================================================================
# Block scanning
#================================================================
class BlockScanner(object):
    ''' Walks the GIF block stream one block at a time.
        The scanner only recognizes signatures and measures byte ranges, it
        never interprets extension contents. Every extension, known or not,
        is a chain of sub-blocks after its label, so one walker keeps the
        cursor in step for all of them.
    '''

    __slots__ = [
        "_cursor",
        "_header",
        "_gct",
        "_width",
        "_height",
        "_bgcolor",
    ]

    #------------------------------------------------
    # Construction
    #------------------------------------------------
    def __init__(self, cursor):
        self._cursor = cursor
        self._header = None
        self._gct = None
        self._width, self._height = 0, 0
        self._bgcolor = 0

    #------------------------------------------------
    # Logical screen
    #------------------------------------------------
    def parse_logical_screen_descriptor(self):
        '''Reads the screen descriptor and global color table.
        Returns the header block, which spans both.'''
        cursor = self._cursor
        start = cursor.position

        #Check header
        signature = cursor.read(3)
        if signature != GIF_HEADER:
            raise MalformedBlockError("Bad header: %r" % signature)
        cursor.seek_forward(3)

        self._width, self._height, *rest = cursor.unpack("<2H3B")
        packed_byte, self._bgcolor, _aspect = rest

        #Skip the GCT
        self._gct = None
        if read_bits(packed_byte, 0, 1):
            table_start = cursor.position
            cursor.seek_forward(color_table_size(packed_byte))
            self._gct = RawBlock(BlockKind.GLOBAL_COLOR_TABLE, table_start,
                                 cursor.slice(table_start, cursor.position - table_start))

        self._header = RawBlock(BlockKind.HEADER, start, cursor.slice(start, cursor.position - start))
        logger.debug("Logical screen %dx%d, header %d bytes", self._width, self._height, len(self._header))
        return self._header

    @property
    def header(self):
        '''Get the header block (screen descriptor and global color table)'''
        return self._header

    @property
    def global_color_table(self):
        '''Get the global color table block, or None'''
        return self._gct

    @property
    def width(self):
        '''Get the logical screen width'''
        return self._width

    @property
    def height(self):
        '''Get the logical screen height'''
        return self._height

    @property
    def background(self):
        '''Get the background color index'''
        return self._bgcolor

    #------------------------------------------------
    # Blocks
    #------------------------------------------------
    def scan_next_block(self):
        ''' Capture the block at the current position.
            Returns a RawBlock, END_OF_STREAM on the trailer or at the end
            of input, or None when no known block starts here (the cursor
            is left where it was).
        '''
        cursor = self._cursor
        if cursor.at_end():
            return END_OF_STREAM

        start = cursor.position
        head = cursor.read(min(2, cursor.size - start))

        if head[0] == GIF_FOOTER:
            cursor.seek_backward(len(head) - 1)
            return END_OF_STREAM

        if head[0] == IMAGE_HEADER:
            cursor.seek_backward(len(head))
            return self._scan_image_block()

        if head[0] == BLOCK_HEADER:
            if len(head) < 2:
                raise TruncatedInputError("Extension label missing at %d" % start)
            kind = EXTENSION_KINDS.get(head[1], BlockKind.UNKNOWN_EXTENSION)
            block_skip(cursor)
            block = RawBlock(kind, start, cursor.slice(start, cursor.position - start))
            logger.debug("Scanned %r", block)
            return block

        cursor.seek_backward(len(head))
        return None

    def _scan_image_block(self):
        '''Capture from the image separator to the end of the image data'''
        cursor = self._cursor
        start = cursor.position

        cursor.seek_forward(IMAGE_DESCRIPTOR_SIZE - 1)
        packed_byte = cursor.read_byte()
        if read_bits(packed_byte, 0, 1):
            cursor.seek_forward(color_table_size(packed_byte))

        #LZW minimum code size
        cursor.seek_forward(1)
        block_skip(cursor)

        block = RawBlock(BlockKind.IMAGE_BLOCK, start, cursor.slice(start, cursor.position - start))
        logger.debug("Scanned %r", block)
        return block

    def __iter__(self):
        '''Yield every block up to the trailer'''
        if self._header is None:
            self.parse_logical_screen_descriptor()
        while True:
            block = self.scan_next_block()
            if block is END_OF_STREAM:
                return
            if block is None:
                raise MalformedBlockError("Invalid block header: %x at %d"
                                          % (self._cursor.peek(1)[0], self._cursor.position))
            yield block

#================================================================
# Extension binding
#================================================================
def bind_frames(blocks):
    ''' Pair every image block with the graphic control extension that
        governs it, in stream order.
        Yields (graphic_control, image_block) with graphic_control None when
        the image has no extension of its own.
    '''
    pending = None
    for block in blocks:
        kind = block.kind
        if kind is BlockKind.GRAPHIC_CONTROL_EXTENSION:
            if pending is not None:
                logger.debug("Graphic control extension at %d replaces the one at %d",
                             block.offset, pending.offset)
            pending = block
        elif kind is BlockKind.IMAGE_BLOCK:
            yield pending, block
            pending = None
        elif kind is BlockKind.PLAIN_TEXT_EXTENSION:
            #The extension governed the text, not the next image
            pending = None

class AnimationInfo(object):
    '''Collects the file-level metadata carried by extensions'''

    __slots__ = [
        "comments",
        "loop_count",
    ]

    def __init__(self):
        self.comments = []
        self.loop_count = None

    def observe(self, blocks):
        '''Pass blocks through, reading comments and looping on the way'''
        for block in blocks:
            if block.kind is BlockKind.COMMENT_EXTENSION:
                text = block_split(BufferCursor(block.data[2:]))
                self.comments.append(text.decode("utf-8", "replace"))
            elif block.kind is BlockKind.APPLICATION_EXTENSION:
                self._read_application(block.data)
            yield block

    def _read_application(self, data):
        ident_size = data[2]
        ident = data[3:3 + ident_size]
        if ident not in LOOP_APPLICATIONS:
            return
        #Looping sub-block is 0x01 then a little-endian loop count
        app_data = block_split(BufferCursor(data[3 + ident_size:]))
        if len(app_data) >= 3 and app_data[0] == 1:
            self.loop_count = app_data[1] | (app_data[2] << 8)

#================================================================
# Frame records
#================================================================
class Disposal(enum.IntEnum):
    '''What happens to a frame's area before the next frame is drawn'''
    NO_DISPOSAL = 0
    DO_NOT_DISPOSE = 1
    RESTORE_TO_BACKGROUND = 2
    RESTORE_TO_PREVIOUS = 3

    @classmethod
    def from_wire(cls, value):
        '''Reserved values 4-7 count as no disposal'''
        if value > cls.RESTORE_TO_PREVIOUS:
            return cls.NO_DISPOSAL
        return cls(value)

class FrameRecord(object):
    ''' Typed fields of one frame, plus the byte ranges needed to hand the
        frame to the codec as a standalone still GIF.
    '''

    __slots__ = [
        "_delay",
        "_disposal",
        "_userin",
        "_trans",
        "_index",
        "_x",
        "_y",
        "_width",
        "_height",
        "_interlace",
        "_sorted",
        "_lct",
        "_lzw_min",
        "_header",
        "_graphic",
        "_image",
    ]

    def __init__(self, header, graphic, image, *, delay=0, disposal=Disposal.NO_DISPOSAL,
                 userin=False, trans=False, index=0, pos=(0, 0), size=(0, 0),
                 interlace=False, lct_sorted=False, lct=None, lzw_min=0):
        self._header = header
        self._graphic = graphic
        self._image = image
        self._delay = delay
        self._disposal = disposal
        self._userin = bool(userin)
        self._trans = bool(trans)
        self._index = index
        self._x, self._y = pos
        self._width, self._height = size
        self._interlace = bool(interlace)
        self._sorted = bool(lct_sorted)
        self._lct = lct
        self._lzw_min = lzw_min

    #------------------------------------------------
    # Timing and disposal
    #------------------------------------------------
    @property
    def delay(self):
        '''Get the delay time in hundredths of a second'''
        return self._delay

    @property
    def disposal(self):
        '''Get the disposal method'''
        return self._disposal

    @property
    def user_input(self):
        '''Check if the user input flag is set'''
        return self._userin

    #------------------------------------------------
    # Transparency
    #------------------------------------------------
    @property
    def transparent(self):
        '''Check if the transparency flag is set'''
        return self._trans

    @property
    def transparent_index(self):
        '''Get the transparent color index (meaningful only if transparent)'''
        return self._index

    #------------------------------------------------
    # Dimensions
    #------------------------------------------------
    @property
    def left(self):
        return self._x

    @property
    def top(self):
        return self._y

    @property
    def width(self):
        return self._width

    @property
    def height(self):
        return self._height

    @property
    def position(self):
        '''Get the image position'''
        return self._x, self._y

    @property
    def size(self):
        '''Get the image size'''
        return self._width, self._height

    #------------------------------------------------
    # Image properties
    #------------------------------------------------
    @property
    def interlace(self):
        return self._interlace

    @property
    def sorted(self):
        return self._sorted

    @property
    def local_color_table(self):
        '''Get the raw local color table bytes, or None'''
        return self._lct

    @property
    def lzw_code_size(self):
        return self._lzw_min

    #------------------------------------------------
    # Byte ranges
    #------------------------------------------------
    @property
    def header(self):
        return self._header

    @property
    def graphic_control(self):
        '''Get the graphic control extension bytes, or None'''
        return self._graphic

    @property
    def image_data(self):
        '''Get the image block bytes'''
        return self._image

    @property
    def still_image(self):
        '''Build a standalone single-image GIF for this frame'''
        out = bytearray(self._header)
        if self._graphic is not None:
            out.extend(self._graphic)
        out.extend(self._image)
        out.append(GIF_FOOTER)
        return bytes(out)

    def __repr__(self):
        return "FrameRecord(pos=%r, size=%r, delay=%d, disposal=%s)" % (
            self.position, self.size, self._delay, self._disposal.name)

class FrameDecoder(object):
    ''' Turns bound block pairs into frame records and keeps the totals:
        the summed delay and the canvas size, which is the largest frame
        width and height rather than the logical screen.
    '''

    __slots__ = [
        "_header",
        "_records",
        "_duration",
        "_width",
        "_height",
    ]

    def __init__(self, header):
        self._header = header
        self._records = []
        self._duration = 0
        self._width, self._height = 0, 0

    def decode(self, graphic_control, image_block):
        '''Decode one (graphic control, image block) pair'''
        fields = {}
        graphic = None
        if graphic_control is not None:
            graphic = graphic_control.data
            if len(graphic) < 3 + GRAPHIC_SIZE or graphic[2] < GRAPHIC_SIZE:
                raise MalformedBlockError("Bad graphic extension size at %d" % graphic_control.offset)
            packed_byte = graphic[3]
            fields["disposal"] = Disposal.from_wire(read_bits(packed_byte, 3, 3))
            fields["userin"] = read_bits(packed_byte, 6, 1)
            fields["trans"] = read_bits(packed_byte, 7, 1)
            fields["delay"], fields["index"] = unpack("<HB", graphic[4:7])

        #Unpack image descriptor
        image = image_block.data
        x, y, width, height, packed_byte = unpack("<4HB", image[1:IMAGE_DESCRIPTOR_SIZE])
        lct = None
        table_end = IMAGE_DESCRIPTOR_SIZE
        if read_bits(packed_byte, 0, 1):
            table_end += color_table_size(packed_byte)
            lct = image[IMAGE_DESCRIPTOR_SIZE:table_end]

        record = FrameRecord(
            self._header, graphic, image,
            pos=(x, y),
            size=(width, height),
            interlace=read_bits(packed_byte, 1, 1),
            lct_sorted=read_bits(packed_byte, 2, 1),
            lct=lct,
            lzw_min=image[table_end],
            **fields
        )

        self._records.append(record)
        self._duration += record.delay
        self._width = max(self._width, width)
        self._height = max(self._height, height)
        logger.debug("Frame %d: %r", len(self._records) - 1, record)
        return record

    @property
    def records(self):
        '''Get the decoded records in stream order'''
        return self._records

    @property
    def total_duration(self):
        '''Get the summed delay in hundredths of a second'''
        return self._duration

    @property
    def canvas_size(self):
        '''Get the largest frame width and height'''
        return self._width, self._height

#================================================================
# Image codec
#================================================================
class PillowCodec(object):
    ''' Pixel work done with Pillow.
        Any object with these methods can stand in for it.
    '''

    resample = Image.Resampling.BICUBIC

    def decode(self, data):
        '''Decode a still GIF into a bitmap'''
        image = Image.open(BytesIO(data))
        image.load()
        return image

    def frame_layer(self, image, box):
        '''Cut the frame rectangle out of a decoded bitmap as RGBA'''
        return image.crop(box).convert("RGBA")

    def blank_canvas(self, width, height):
        return Image.new("RGBA", (width, height), (0, 0, 0, 0))

    def transparent_color(self, image):
        '''Get the RGB color a bitmap declares transparent, or None'''
        trans = image.info.get("transparency")
        if trans is None:
            return None
        if isinstance(trans, tuple):
            return tuple(trans[:3])
        if image.mode == "P":
            palette = image.getpalette() or []
            if 3 * trans + 3 > len(palette):
                return None
            return tuple(palette[3 * trans:3 * trans + 3])
        if image.mode == "L":
            return trans, trans, trans
        return None

    def set_transparent_color(self, canvas, color):
        '''Fill the canvas with color, fully transparent, and remember it'''
        canvas.paste(tuple(color) + (0,), (0, 0) + canvas.size)
        canvas.info["transparency"] = tuple(color)

    def copy(self, target, source, dest, box, size, blend=True):
        ''' Copy the box of source into target at dest, resampled to size.
            The part falling outside either image is dropped. With blend
            the source is alpha composited, otherwise it replaces.
        '''
        size = tuple(size)
        region = source.crop(box)
        if region.size != size:
            region = region.resize(size, self.resample)

        x, y = dest
        width = min(size[0], target.width - x)
        height = min(size[1], target.height - y)
        if width <= 0 or height <= 0:
            return target

        region = region.crop((0, 0, width, height))
        if region.mode != "RGBA":
            region = region.convert("RGBA")
        if blend:
            target.alpha_composite(region, (x, y))
        else:
            target.paste(region, (x, y))
        return target

#================================================================
# Compositing
#================================================================
class FrameCompositor(object):
    ''' Layers every frame onto a running canvas.
        Each composite starts from a blank canvas, except for frames that
        ask not to be disposed, which start from the previous composite.
    '''

    __slots__ = [
        "_codec",
        "_width",
        "_height",
    ]

    def __init__(self, codec, canvas_size):
        self._codec = codec
        self._width, self._height = canvas_size

    def composite(self, records, original_frames=False):
        '''Return one bitmap per record, in order'''
        codec = self._codec
        canvas_box = (0, 0, self._width, self._height)
        canvas_size = (self._width, self._height)
        images = []
        previous = None

        for i, record in enumerate(records):
            decoded = codec.decode(record.still_image)
            if original_frames:
                images.append(decoded)
                continue

            if previous is None:
                previous = decoded

            canvas = codec.blank_canvas(self._width, self._height)
            color = codec.transparent_color(previous)
            if color is not None:
                codec.set_transparent_color(canvas, color)

            if record.disposal is Disposal.DO_NOT_DISPOSE and i > 0:
                logger.debug("Frame %d keeps the previous composite", i)
                codec.copy(canvas, previous, (0, 0), canvas_box, canvas_size, blend=False)

            left, top = record.position
            layer = codec.frame_layer(decoded, (left, top, left + record.width, top + record.height))
            codec.copy(canvas, layer, (left, top), canvas_box, canvas_size)

            images.append(canvas)
            previous = canvas

        return images

#================================================================
# Results
#================================================================
class Frame(object):
    '''One extracted frame'''

    __slots__ = [
        "_image",
        "_record",
    ]

    def __init__(self, image, record):
        self._image = image
        self._record = record

    @property
    def image(self):
        '''Get the composited bitmap'''
        return self._image

    @property
    def record(self):
        return self._record

    @property
    def duration(self):
        '''Get the delay in hundredths of a second'''
        return self._record.delay

    @property
    def disposal(self):
        return self._record.disposal

    @property
    def position(self):
        return {"x": self._record.left, "y": self._record.top}

    @property
    def dimensions(self):
        return {"width": self._record.width, "height": self._record.height}

class FrameList(object):
    '''Every frame of an animation, with the totals'''

    __slots__ = [
        "_frames",
        "_duration",
        "_canvas",
        "_loop",
        "_comments",
    ]

    def __init__(self, frames, total_duration, canvas_size, loop_count=None, comments=()):
        self._frames = list(frames)
        self._duration = total_duration
        self._canvas = tuple(canvas_size)
        self._loop = loop_count
        self._comments = list(comments)

    #------------------------------------------------
    # Totals
    #------------------------------------------------
    @property
    def total_duration(self):
        '''Get the summed delay in hundredths of a second'''
        return self._duration

    @property
    def frame_count(self):
        return len(self._frames)

    @property
    def canvas_size(self):
        '''Get the canvas width and height'''
        return self._canvas

    @property
    def loop_count(self):
        '''Get the loop count, 0 for forever, None when unspecified'''
        return self._loop

    @property
    def comments(self):
        return self._comments

    #------------------------------------------------
    # Per-frame views
    #------------------------------------------------
    @property
    def frames(self):
        return self._frames

    @property
    def images(self):
        return [f.image for f in self._frames]

    @property
    def durations(self):
        return [f.duration for f in self._frames]

    @property
    def positions(self):
        return [f.position for f in self._frames]

    @property
    def dimensions(self):
        return [f.dimensions for f in self._frames]

    def __len__(self):
        return len(self._frames)

    def __iter__(self):
        return iter(self._frames)

    def __getitem__(self, index):
        return self._frames[index]

#================================================================
# Extraction
#================================================================
class FrameExtractor(object):
    ''' One extraction run over one cursor.
        Build a new one for every input, nothing carries over between runs.
    '''

    __slots__ = [
        "_cursor",
        "_codec",
    ]

    def __init__(self, cursor, codec=None):
        self._cursor = cursor
        self._codec = codec if codec is not None else PillowCodec()

    def parse(self):
        '''Scan the blocks and decode the frame records'''
        scanner = BlockScanner(self._cursor)
        header = scanner.parse_logical_screen_descriptor()
        decoder = FrameDecoder(header.data)
        info = AnimationInfo()
        for graphic_control, image_block in bind_frames(info.observe(scanner)):
            decoder.decode(graphic_control, image_block)
        return decoder, info

    def extract(self, original_frames=False):
        '''Parse and composite every frame'''
        decoder, info = self.parse()
        compositor = FrameCompositor(self._codec, decoder.canvas_size)
        images = compositor.composite(decoder.records, original_frames)
        frames = [Frame(image, record) for image, record in zip(images, decoder.records)]
        logger.debug("Extracted %d frames, %d cs in total", len(frames), decoder.total_duration)
        return FrameList(frames, decoder.total_duration, decoder.canvas_size,
                         info.loop_count, info.comments)

#================================================================
# Public interface
#================================================================
def is_animated_data(data):
    '''Check if GIF bytes hold more than one frame'''
    return len(ANIMATION_MARKER.findall(data)) > 1

def is_animated(path):
    '''Check if the GIF file at path holds more than one frame'''
    count = 0
    tail = b""
    with open(path, "rb") as stream:
        while count < 2:
            chunk = stream.read(ANIMATION_CHUNK_SIZE)
            if not chunk:
                break
            data = tail + chunk
            end = 0
            for match in ANIMATION_MARKER.finditer(data):
                count += 1
                end = match.end()
            #Keep what could still start a match, never a counted one
            tail = data[max(end, len(data) - ANIMATION_MARKER_SIZE + 1):]
    return count > 1

def extract_from_data(data, original_frames=False, codec=None):
    '''Extract every frame of an animated GIF held in memory'''
    if not is_animated_data(data):
        raise NotAnimatedError("The GIF image you are trying to explode is not animated")
    return FrameExtractor(BufferCursor(data), codec).extract(original_frames)

def extract_from_file(path, original_frames=False, codec=None):
    '''Extract every frame of an animated GIF file'''
    if not is_animated(path):
        raise NotAnimatedError("The GIF image you are trying to explode is not animated")
    with FileCursor(path) as cursor:
        return FrameExtractor(cursor, codec).extract(original_frames)
