# A part of pdfsubset, derived from pdfrw (https://github.com/pmaupin/pdfrw)
# Copyright (C) 2006-2015 Patrick Maupin, Austin, Texas
# MIT license -- See LICENSE.txt for details


class PdfIndirect(tuple):
    ''' A reference to an indirect object.  The reference itself is
        the (object number, generation number) tuple.  It is resolved
        through the Document that owns the object, never in place,
        so that reading a document does not change it.
    '''

    def __new__(cls, objnum, gennum=0):
        if isinstance(objnum, tuple):
            objnum, gennum = objnum
        return tuple.__new__(cls, (int(objnum), int(gennum)))

    objnum = property(lambda self: self[0])
    gennum = property(lambda self: self[1])

    def __repr__(self):
        return 'PdfIndirect(%d, %d)' % self

    def __str__(self):
        return '%d %d R' % self
