# A part of pdfsubset, derived from pdfrw (https://github.com/pmaupin/pdfrw)
# Copyright (C) 2006-2015 Patrick Maupin, Austin, Texas
# MIT license -- See LICENSE.txt for details

from .pdfname import PdfName, BasePdfName
from .pdfobject import PdfObject
from ..errors import PdfParseError


class PdfDict(dict):
    ''' A PDF dictionary, optionally with a stream.

        Keys are always names (BasePdfName).  Beyond what dict
        does:

          - d.MediaBox reads d['/MediaBox'], and a missing key
            reads as None, through either spelling.

          - Storing None, by item or by attribute, removes the key.

          - References (PdfIndirect) are stored and returned as
            they are.  Document.resolve() follows them.

        Two attribute names are not dictionary keys:

          - stream holds the stream data as a latin-1 str.
            Assigning it also sets /Length.
          - _stream sets the stream data and leaves /Length
            alone, as the reader does before it knows whether
            /Length was right.

        The dictionary entry "/stream" is still reachable with
        d["/stream"].
    '''
    stream = None

    # attribute name -> (stored as, update /Length)
    _special = dict(stream=('stream', True),
                    _stream=('stream', False))

    def __init__(self, *args, **kw):
        if len(args) == 1:
            source, = args
            self.update(source)
            if isinstance(source, PdfDict):
                self._stream = source.stream
        elif args:
            self.update(args)
        for key, value in kw.items():
            setattr(self, key, value)

    def __setitem__(self, name, value, setter=dict.__setitem__,
                    BasePdfName=BasePdfName, isinstance=isinstance):
        if not isinstance(name, BasePdfName):
            raise PdfParseError('Dict key %r is not a PdfName' % (name,))
        if value is not None:
            setter(self, name, value)
        else:
            self.pop(name, None)

    def __getitem__(self, key):
        return self.get(key)

    def update(self, *args, **kw):
        for key, value in dict(*args, **kw).items():
            self[key] = value

    def __getattr__(self, name, PdfName=PdfName):
        if name.startswith('__'):
            raise AttributeError(name)
        return self.get(PdfName(name))

    def __setattr__(self, name, value, special=_special.get,
                    PdfName=PdfName, vars=vars):
        info = special(name)
        if info is None:
            self[PdfName(name)] = value
            return
        name, setlength = info
        vars(self)[name] = value
        if setlength:
            self.Length = None if value is None else PdfObject(len(value))

    def copy(self):
        ''' Shallow copy, keeping the stream
        '''
        return type(self)(self)

