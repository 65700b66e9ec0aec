# A part of pdfsubset, derived from pdfrw (https://github.com/pmaupin/pdfrw)
# Copyright (C) 2006-2015 Patrick Maupin, Austin, Texas
# MIT license -- See LICENSE.txt for details

'''
Currently, this file only knows how to compress using the
flate (zlib) algorithm, and only streams that carry no
filter yet.
'''

import zlib

from .objects import PdfName, PdfDict
from .convert import convert_load, convert_store


def compress(obj, flate=PdfName.FlateDecode):
    ''' Return a compressed copy of a stream dictionary, or the
        dictionary itself if it is already filtered or compression
        would not make it smaller.  The argument is never changed.
    '''
    if obj.Filter is not None:
        return obj
    oldstr = obj.stream
    newstr = convert_load(zlib.compress(convert_store(oldstr)))
    if len(newstr) >= len(oldstr):
        return obj
    result = PdfDict(obj)
    result.stream = newstr
    result.Filter = flate
    result.DecodeParms = None
    return result
