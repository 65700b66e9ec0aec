# A part of pdfsubset, derived from pdfrw (https://github.com/pmaupin/pdfrw)
# Copyright (C) 2006-2015 Patrick Maupin, Austin, Texas
# MIT license -- See LICENSE.txt for details

'''
Objects that can occur in PDF files.  The most important
objects are arrays and dicts, and dicts could have an
associated stream.  References between objects are PdfIndirect
(objnum, gennum) tuples.
'''
from .pdfname import PdfName, BasePdfName
from .pdfdict import PdfDict
from .pdfarray import PdfArray
from .pdfobject import PdfObject, PdfNull
from .pdfstring import PdfString
from .pdfindirect import PdfIndirect

__all__ = """PdfName BasePdfName PdfDict PdfArray
             PdfObject PdfNull PdfString PdfIndirect""".split()
