# A part of pdfsubset, derived from pdfrw (https://github.com/pmaupin/pdfrw)
# Copyright (C) 2006-2015 Patrick Maupin, Austin, Texas
# MIT license -- See LICENSE.txt for details


class PdfObject(str):
    ''' A PdfObject is a textual representation of any PDF file object
        other than an array, dict, name or string: numbers, booleans,
        null and keywords.  It is written out exactly as it reads.
    '''


PdfNull = PdfObject('null')
