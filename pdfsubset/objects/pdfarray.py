# A part of pdfsubset, derived from pdfrw (https://github.com/pmaupin/pdfrw)
# Copyright (C) 2006-2015 Patrick Maupin, Austin, Texas
# MIT license -- See LICENSE.txt for details


class PdfArray(list):
    ''' A PdfArray maps the PDF file array object into a Python list.
        Elements that are PdfIndirect references are left as
        references; the owning Document resolves them.
    '''

    def __init__(self, source=()):
        list.__init__(self, source)
