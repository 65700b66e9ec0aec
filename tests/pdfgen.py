#! /usr/bin/env python
# A part of pdfsubset
# MIT license -- See LICENSE.txt for details

'''
Build small PDF files in memory for the tests.

The files are assembled by hand, byte offsets and all, so that
the reader is tested against PDF text that this package's own
writer did not produce.  Everything is latin-1 text until the
final encode.
'''

import zlib


def stream(dictbody, data):
    ''' Body of a stream object with a correct /Length.
    '''
    return '<< %s /Length %d >>\nstream\n%s\nendstream' % (
        dictbody, len(data), data)


def xref_table(offsets, size):
    rows = ['xref\n0 %d\n' % size, '0000000000 65535 f\r\n']
    for num in range(1, size):
        if num in offsets:
            rows.append('%010d 00000 n\r\n' % offsets[num])
        else:
            rows.append('0000000000 65535 f\r\n')
    return ''.join(rows)


def png_up(data, columns):
    ''' Encode rows with the PNG "Up" predictor (type 2).
    '''
    result = []
    prior = [0] * columns
    for start in range(0, len(data), columns):
        row = [ord(x) for x in data[start:start + columns]]
        result.append(chr(2))
        result.extend(chr((x - y) % 256) for x, y in zip(row, prior))
        prior = row
    return ''.join(result)


def latin1_zlib(data):
    return zlib.compress(data.encode('latin-1')).decode('latin-1')


def xref_stream(num, entries, size, trailer, predictor=False):
    ''' Build a cross-reference stream object.  entries maps
        object number to (type, field2, field3).
    '''
    rows = []
    for objnum in range(size):
        xtype, p1, p2 = entries.get(objnum, (0, 0, 65535 if not objnum
                                             else 0))
        rows.append(chr(xtype) + ''.join(
            chr((p1 >> shift) & 0xFF) for shift in (24, 16, 8, 0)) +
            chr((p2 >> 8) & 0xFF) + chr(p2 & 0xFF))
    data = ''.join(rows)
    parms = ''
    if predictor:
        data = png_up(data, 7)
        parms = ' /DecodeParms << /Predictor 12 /Columns 7 >>'
    data = latin1_zlib(data)
    body = stream('/Type /XRef /Size %d /W [1 4 2] /Filter /FlateDecode%s '
                  '%s' % (size, parms, trailer), data)
    return '%d 0 obj\n%s\nendobj\n' % (num, body)


def build(objects, trailer, version='1.4', xref='table', compressed=(),
          predictor=False, prefix=''):
    ''' Assemble a PDF file.

        objects    -- list of (objnum, body) pairs
        trailer    -- trailer dictionary entries, without /Size
        xref       -- 'table' or 'stream'
        compressed -- object numbers to store in an object stream
                      (xref='stream' only)
        predictor  -- use the PNG Up predictor on the xref stream
        prefix     -- junk to put in front of the header
    '''
    header = '%%PDF-%s\n%%\xe2\xe3\xcf\xd3\n' % version
    parts = [prefix, header]
    pos = len(prefix) + len(header)
    offsets = {}
    inline = []
    packed = []
    for num, body in objects:
        (packed if num in compressed else inline).append((num, body))

    for num, body in inline:
        text = '%d 0 obj\n%s\nendobj\n' % (num, body)
        offsets[num] = pos
        pos += len(text)
        parts.append(text)

    size = max([num for num, body in objects]) + 1

    if xref == 'table':
        assert not packed
        parts.append(xref_table(offsets, size))
        parts.append('trailer\n<< %s /Size %d >>\nstartxref\n%d\n%%%%EOF\n'
                     % (trailer, size, pos))
        return ''.join(parts).encode('latin-1')

    entries = dict((num, (1, offset, 0)) for num, offset in offsets.items())
    if packed:
        stmnum = size
        size += 1
        heads = []
        bodies = []
        where = 0
        for index, (num, body) in enumerate(packed):
            heads.append('%d %d' % (num, where))
            bodies.append(body + '\n')
            where += len(body) + 1
            entries[num] = (2, stmnum, index)
        head = ' '.join(heads) + '\n'
        data = latin1_zlib(head + ''.join(bodies))
        text = '%d 0 obj\n%s\nendobj\n' % (stmnum, stream(
            '/Type /ObjStm /N %d /First %d /Filter /FlateDecode' %
            (len(packed), len(head)), data))
        offsets[stmnum] = pos
        entries[stmnum] = (1, pos, 0)
        pos += len(text)
        parts.append(text)

    xrefnum = size
    size += 1
    entries[xrefnum] = (1, pos, 0)
    parts.append(xref_stream(xrefnum, entries, size, trailer, predictor))
    parts.append('startxref\n%d\n%%%%EOF\n' % pos)
    return ''.join(parts).encode('latin-1')


def append_update(data, objects, trailer):
    ''' Append an incremental update section to a file that
        uses a classic xref table.
    '''
    text = data.decode('latin-1')
    prev = int(text[text.rindex('startxref'):].split()[1])
    pos = len(text)
    parts = [text]
    offsets = {}
    for num, body in objects:
        obj = '%d 0 obj\n%s\nendobj\n' % (num, body)
        offsets[num] = pos
        pos += len(obj)
        parts.append(obj)
    size = max(offsets) + 1
    parts.append('xref\n0 1\n0000000000 65535 f\r\n')
    for num in sorted(offsets):
        parts.append('%d 1\n%010d 00000 n\r\n' % (num, offsets[num]))
    parts.append('trailer\n<< %s /Size %d /Prev %d >>\nstartxref\n%d\n'
                 '%%%%EOF\n' % (trailer, size, prev, pos))
    return ''.join(parts).encode('latin-1')


def content(label, font='/F1'):
    return stream('', 'BT %s 12 Tf 72 720 Td (%s) Tj ET' % (font, label))


def five_page_objects():
    ''' Objects for a five page document.

        - pages 0 and 1 share the resource dictionary 20, and
          through it the font 22
        - pages 2, 3 and 4 sit under an intermediate /Pages node
          (9) that supplies /Resources and /Rotate
        - page 4 has its own resources, which use font 22 too,
          and two content streams; one has an indirect /Length
        - page 3 carries a link annotation pointing at page 0
        - every page inherits /MediaBox from the root node
    '''
    image = '\xff'
    last = 'BT /F1 12 Tf (Page 5, part 2) Tj ET'
    return [
        (1, '<< /Type /Catalog /Pages 2 0 R >>'),
        (2, '<< /Type /Pages /Kids [3 0 R 4 0 R 9 0 R] /Count 5 '
            '/MediaBox [0 0 612 792] >>'),
        (3, '<< /Type /Page /Parent 2 0 R /Resources 20 0 R '
            '/Contents 30 0 R >>'),
        (4, '<< /Type /Page /Parent 2 0 R /Resources 20 0 R '
            '/Contents 31 0 R >>'),
        (5, '<< /Type /Page /Parent 9 0 R /Contents 32 0 R >>'),
        (6, '<< /Type /Page /Parent 9 0 R /Contents 33 0 R '
            '/Annots [40 0 R] >>'),
        (7, '<< /Type /Page /Parent 9 0 R /Contents [34 0 R 35 0 R] '
            '/Resources << /Font << /F1 22 0 R >> >> >>'),
        (9, '<< /Type /Pages /Parent 2 0 R /Kids [5 0 R 6 0 R 7 0 R] '
            '/Count 3 /Resources 21 0 R /Rotate 90 >>'),
        (20, '<< /Font << /F1 22 0 R >> /ProcSet [/PDF /Text] >>'),
        (21, '<< /Font << /F2 23 0 R >> /XObject << /Im1 24 0 R >> >>'),
        (22, '<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>'),
        (23, '<< /Type /Font /Subtype /Type1 /BaseFont /Courier >>'),
        (24, stream('/Type /XObject /Subtype /Image /Width 1 /Height 1 '
                    '/ColorSpace /DeviceGray /BitsPerComponent 8', image)),
        (30, content('Page 1')),
        (31, content('Page 2')),
        (32, content('Page 3', '/F2')),
        (33, content('Page 4', '/F2')),
        (34, content('Page 5, part 1')),
        (35, '<< /Length 36 0 R >>\nstream\n%s\nendstream' % last),
        (36, '%d' % len(last)),
        (40, '<< /Type /Annot /Subtype /Link /Rect [0 0 100 20] '
             '/Border [0 0 0] /P 6 0 R /Dest [3 0 R /Fit] >>'),
        (50, '<< /Producer (pdfgen \\(tests\\)) /Title (Five pages) >>'),
    ]


FIVE_PAGE_TRAILER = '/Root 1 0 R /Info 50 0 R'

# Non-container objects that can live in an object stream
PACKABLE = (1, 2, 3, 4, 5, 6, 7, 9, 20, 21, 22, 23, 36, 40, 50)


def five_pages(**kw):
    return build(five_page_objects(), FIVE_PAGE_TRAILER, **kw)


def single_page(body='BT /F1 12 Tf (Hello) Tj ET', extra=''):
    return build([
        (1, '<< /Type /Catalog /Pages 2 0 R >>'),
        (2, '<< /Type /Pages /Kids [3 0 R] /Count 1 >>'),
        (3, '<< /Type /Page /Parent 2 0 R /MediaBox [0 0 200 200] '
            '/Resources << /Font << /F1 5 0 R >> >> /Contents 4 0 R %s >>'
            % extra),
        (4, stream('', body)),
        (5, '<< /Type /Font /Subtype /Type1 /BaseFont /Times-Roman >>'),
    ], '/Root 1 0 R')
