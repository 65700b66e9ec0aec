# A part of pdfsubset, derived from pdfrw (https://github.com/pmaupin/pdfrw)
# Copyright (C) 2006-2015 Patrick Maupin, Austin, Texas
# MIT license -- See LICENSE.txt for details

from .pdfwriter import PdfWriter, serialize
from .pdfreader import PdfReader, parse
from .document import Document
from .extract import extract
from .selection import PageSelection
from .objects import (PdfObject, PdfName, PdfArray, PdfIndirect,
                      PdfDict, PdfString)
from .tokens import PdfTokens
from .errors import (PdfError, PdfParseError, MalformedStructure,
                     UnsupportedVersion, ExtractError, IndexOutOfRange,
                     ResourceResolutionError, PdfOutputError)

__version__ = '0.1'


def subset(fdata, indices, compress=False):
    ''' Parse a PDF, keep the pages listed in indices (0-based,
        in that order), and return the bytes of the new PDF.
    '''
    return serialize(extract(parse(fdata), indices), compress=compress)


__all__ = """PdfWriter PdfReader Document PageSelection PdfObject
             PdfName PdfArray PdfIndirect PdfTokens PdfDict
             PdfString PdfError PdfParseError
             MalformedStructure UnsupportedVersion ExtractError
             IndexOutOfRange ResourceResolutionError PdfOutputError
             parse extract serialize subset""".split()
