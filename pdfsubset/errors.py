# A part of pdfsubset, derived from pdfrw (https://github.com/pmaupin/pdfrw)
# Copyright (C) 2006-2015 Patrick Maupin, Austin, Texas
# MIT license -- See LICENSE.txt for details

'''
PDF Exceptions and error handling
'''

import logging


fmt = logging.Formatter('[%(levelname)s] %(filename)s:%(lineno)d %(message)s')

handler = logging.StreamHandler()
handler.setFormatter(fmt)

log = logging.getLogger('pdfsubset')
log.setLevel(logging.WARNING)
log.addHandler(handler)


class PdfError(Exception):
    "Abstract base class of exceptions thrown by this module"

    def __init__(self, msg):
        Exception.__init__(self, msg)
        self.msg = msg

    def __str__(self):
        return self.msg


class PdfParseError(PdfError):
    "Error thrown by parser/tokenizer"


class MalformedStructure(PdfParseError):
    ''' The source is not a parseable PDF: missing or corrupt
        header, trailer or cross-reference data, a broken page
        tree, or a reference to an object that does not exist.
    '''


class UnsupportedVersion(PdfParseError):
    ''' The source parses, but uses a structural feature
        (such as encryption) that the document model does
        not represent.
    '''


class ExtractError(PdfError):
    "Error thrown by the page extractor"


class IndexOutOfRange(ExtractError):
    "A requested page index is not a page of the source document"

    def __init__(self, index, page_count=None):
        if page_count is None:
            msg = 'Page index %r is out of range' % (index,)
        else:
            msg = ('Page index %r is out of range for a document with '
                   '%d pages' % (index, page_count))
        PdfError.__init__(self, msg)
        self.index = index
        self.page_count = page_count


class ResourceResolutionError(ExtractError):
    "An object graph refers to an object missing from the document"

    def __init__(self, key):
        PdfError.__init__(self, 'Reference to missing object %d %d R' %
                          tuple(key))
        self.key = tuple(key)


class PdfOutputError(PdfError):
    ''' Error thrown by PDF writer.  This indicates a broken
        document (a bug upstream), never bad user input.
    '''
