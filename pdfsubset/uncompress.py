# A part of pdfsubset, derived from pdfrw (https://github.com/pmaupin/pdfrw)
# Copyright (C) 2006-2015 Patrick Maupin, Austin, Texas
# Copyright (C) 2012-2015 Nerijus Mika
# MIT license -- See LICENSE.txt for details
# Copyright (c) 2006, Mathieu Fenniak
# BSD license -- see LICENSE.txt for details
'''
A small subset of decompression filters.  The reader only needs
to look inside cross-reference streams and object streams, which
are always FlateDecode, usually with a PNG predictor.  Page content
streams are copied without being decompressed.
'''
import zlib

from .objects import PdfDict, PdfName, PdfArray
from .errors import log
from .convert import convert_load, convert_store


def streamobjects(mylist, isinstance=isinstance, PdfDict=PdfDict):
    for obj in mylist:
        if isinstance(obj, PdfDict) and obj.stream is not None:
            yield obj


def decode_parms(obj, isinstance=isinstance):
    ''' Return the /DecodeParms of a stream as a single dict.
        An array of parameter dicts (one per filter) is merged.
    '''
    parms = obj.DecodeParms or obj.DP
    if isinstance(parms, PdfArray):
        merged = PdfDict()
        for x in parms:
            if x is not None:
                merged.update(x)
        parms = merged
    return parms


def uncompress(mylist, leave_raw=False, warnings=set(),
               flate=PdfName.FlateDecode, decompress=zlib.decompressobj,
               isinstance=isinstance, list=list, len=len):
    ''' Decompress every FlateDecode stream in mylist, in place.
        Returns False if any stream could not be decompressed.
        With leave_raw, the stream is left as bytes rather than
        converted back to latin-1 text.
    '''
    ok = True
    for obj in streamobjects(mylist):
        ftype = obj.Filter
        if ftype is None:
            continue
        if isinstance(ftype, list) and len(ftype) == 1:
            ftype = ftype[0]
        parms = decode_parms(obj)
        if ftype != flate:
            msg = ('Not decompressing: cannot use filter %r'
                   ' with parameters %r') % (ftype, parms)
            if msg not in warnings:
                warnings.add(msg)
                log.warning(msg)
            ok = False
            continue

        dco = decompress()
        try:
            data = dco.decompress(convert_store(obj.stream))
        except zlib.error as s:
            data, error = None, str(s)
        else:
            error = None
            predictor = int(parms.Predictor or 1) if parms else 1
            if 10 <= predictor <= 15:
                data, error = flate_png(data, predictor,
                                        int(parms.Columns or 1),
                                        int(parms.Colors or 1),
                                        int(parms.BitsPerComponent or 8))
            elif predictor != 1:
                error = 'Unsupported flatedecode predictor %r' % predictor
            if error is None and dco.unused_data.strip():
                error = ('Unconsumed compression data: %r' %
                         dco.unused_data[:20])

        if error is not None:
            log.error(error)
            ok = False
            continue
        obj.Filter = None
        obj.DecodeParms = None
        obj.DP = None
        obj.stream = data if leave_raw else convert_load(data)
    return ok


def paeth(left, up, upleft):
    p = left + up - upleft
    pa = abs(p - left)
    pb = abs(p - up)
    pc = abs(p - upleft)
    if pa <= pb and pa <= pc:
        return left
    if pb <= pc:
        return up
    return upleft


# PNG filter type -> predicted value of a byte, given the
# reconstructed bytes to its left, above it, and above-left.
# http://www.libpng.org/pub/png/spec/1.2/PNG-Filters.html
PNG_PREDICTORS = {
    1: lambda left, up, upleft: left,                # Sub
    2: lambda left, up, upleft: up,                  # Up
    3: lambda left, up, upleft: (left + up) // 2,    # Average
    4: paeth,                                        # Paeth
}


def flate_png(data, predictor=1, columns=1, colors=1, bpc=8,
              predictors=PNG_PREDICTORS):
    ''' Undo PNG prediction on decompressed data.

        Each row of the data starts with a filter type byte, and
        the bytes after it are stored as differences from a value
        predicted from the row itself and the row above.  Cross
        reference streams use this to make their columns compress
        well.

        Predictor 15 ("optimum") allows the last row to be short.

        Returns (data, None), or (None, error message).
    '''
    rowlen = (columns * colors * bpc + 7) // 8
    pixel_size = (colors * bpc + 7) // 8
    data = bytearray(data)
    if predictor == 15:
        data.extend(bytes(-len(data) % (rowlen + 1)))
    if len(data) % (rowlen + 1):
        return None, 'PNG predicted data is not a whole number of rows'

    result = bytearray()
    prior = bytearray(rowlen)
    for start in range(0, len(data), rowlen + 1):
        filter_type = data[start]
        row = data[start + 1:start + 1 + rowlen]
        if filter_type:
            predict = predictors.get(filter_type)
            if predict is None:
                return None, 'Unsupported PNG filter %d' % filter_type
            for i in range(rowlen):
                if i >= pixel_size:
                    left, upleft = row[i - pixel_size], prior[i - pixel_size]
                else:
                    left = upleft = 0
                row[i] = (row[i] + predict(left, prior[i], upleft)) & 0xFF
        result += row
        prior = row
    return bytes(result), None
