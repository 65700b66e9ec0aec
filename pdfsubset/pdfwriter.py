# A part of pdfsubset, derived from pdfrw (https://github.com/pmaupin/pdfrw)
# Copyright (C) 2006-2015 Patrick Maupin, Austin, Texas
# MIT license -- See LICENSE.txt for details

'''
The PdfWriter class writes a Document out as a complete PDF file:
header, every indirect object in ascending object number order,
a classic cross-reference table, and the trailer.

An instance of the PdfWriter class has one method:
    write(document, fname)

serialize(document) does the same thing and returns the bytes.

The writer does not repair anything.  A reference to an object the
Document does not hold, or a value that is not a PDF object, is a
bug in whatever built the Document, and raises PdfOutputError.
'''
import gc
from io import BytesIO

from .objects import PdfName, BasePdfName, PdfArray, PdfDict, PdfString, \
    PdfObject, PdfIndirect
from .compress import compress as do_compress
from .errors import PdfOutputError
from .convert import convert_store


def user_fmt(obj, isinstance=isinstance, float=float, str=str,
             basestring=(str, bytes), encode=PdfString.encode):
    ''' Format Python values that were put into a Document
        without being wrapped as PDF objects first.
    '''

    if isinstance(obj, basestring):
        return encode(obj)

    if obj is None:
        return 'null'

    if isinstance(obj, bool):
        return 'true' if obj else 'false'

    # PDFs don't handle exponent notation
    if isinstance(obj, float):
        return ('%.9f' % obj).rstrip('0').rstrip('.')

    if isinstance(obj, int):
        return str(obj)

    raise PdfOutputError('Cannot format %r as a PDF object' % (obj,))


def FormatObjects(f, document, version='1.3', compress=False,
                  user_fmt=user_fmt, do_compress=do_compress,
                  convert_store=convert_store,
                  id=id, isinstance=isinstance, getattr=getattr, len=len,
                  sum=sum, set=set, str=str,
                  list=list, dict=dict, tuple=tuple,
                  PdfArray=PdfArray, PdfDict=PdfDict,
                  PdfIndirect=PdfIndirect, lengthname=PdfName.Length,
                  pdftypes=(PdfObject, PdfString, BasePdfName)):
    ''' FormatObjects performs the actual formatting and write.
        Nested functions reduce attribute lookups.
    '''

    def f_write(s):
        f.write(convert_store(s))

    def format_ref(ref):
        if ref not in objects:
            raise PdfOutputError('Reference to missing object %d %d R' %
                                 ref)
        return '%d %d R' % ref

    def format_array(myarray, formatter):
        # Format array data into semi-readable ASCII
        if sum([len(x) for x in myarray]) <= 70:
            return formatter % space_join(myarray)
        return format_big(myarray, formatter)

    def format_big(myarray, formatter):
        bigarray = []
        count = 1000000
        for x in myarray:
            lenx = len(x) + 1
            count += lenx
            if count > 71:
                subarray = []
                bigarray.append(subarray)
                count = lenx
            subarray.append(x)
        return formatter % lf_join([space_join(x) for x in bigarray])

    def format_obj(obj):
        ''' format PDF object data into semi-readable ASCII.
            References are formatted in place; the objects they
            point at are written separately.
        '''
        if isinstance(obj, PdfIndirect):
            return format_ref(obj)
        objid = id(obj)
        if objid in visited:
            raise PdfOutputError('Direct object contains itself: %r' %
                                 type(obj))
        while 1:
            if isinstance(obj, (list, dict, tuple)):
                if isinstance(obj, PdfArray):
                    visiting(objid)
                    myarray = [format_obj(x) for x in obj]
                    leaving(objid)
                    return format_array(myarray, '[%s]')
                elif isinstance(obj, PdfDict):
                    stream = obj.stream
                    if compress and stream:
                        obj = do_compress(obj)
                        stream = obj.stream
                    visiting(objid)
                    pairs = [(getattr(x, 'encoded', None) or x, y)
                             for (x, y) in obj.items()
                             if stream is None or x != lengthname]
                    if stream is not None:
                        pairs.append((lengthname, PdfObject(len(stream))))
                    myarray = []
                    for key, value in sorted(pairs):
                        myarray.append(key)
                        myarray.append(format_obj(value))
                    leaving(objid)
                    result = format_array(myarray, '<<%s>>')
                    if stream is not None:
                        result = ('%s\nstream\n%s\nendstream' %
                                  (result, stream))
                    return result
                obj = (PdfArray, PdfDict)[isinstance(obj, dict)](obj)
                continue

            # Tokens from a file are written as they were read
            if isinstance(obj, pdftypes):
                return str(getattr(obj, 'encoded', None) or obj)
            return user_fmt(obj)

    objects = document.objects
    visited = set()
    visiting = visited.add
    leaving = visited.remove
    space_join = ' '.join
    lf_join = '\n  '.join

    keys = sorted(objects)
    for first, second in zip(keys, keys[1:]):
        if first[0] == second[0]:
            raise PdfOutputError('Object number %d is used twice' %
                                 first[0])

    # Format everything before writing anything, so that
    # a broken document produces no output at all.
    objlist = [(key, format_obj(objects[key])) for key in keys]
    trailer = format_obj(document.trailer)

    # Now we have all the pieces to write out to the file.
    # Keep careful track of the counts while we do it so
    # we can correctly build the cross-reference.

    header = '%%PDF-%s\n%%\xe2\xe3\xcf\xd3\n' % version
    f_write(header)
    offset = len(header)
    offsets = dict()

    for key, x in objlist:
        objstr = '%d %d obj\n%s\nendobj\n' % (key[0], key[1], x)
        offsets[key[0]] = (offset, key[1], 'n')
        offset += len(objstr)
        f_write(objstr)

    size = document.size
    free = (0, 65535, 'f')
    f_write('xref\n0 %s\n' % size)
    for objnum in range(size):
        f_write('%010d %05d %s\r\n' % offsets.get(objnum, free))
    f_write('trailer\n\n%s\nstartxref\n%s\n%%%%EOF\n' % (trailer, offset))


class PdfWriter(object):

    fname = None

    def __init__(self, fname=None, version=None, compress=False):
        """
            Parameters:
                fname -- Output file name, or file-like binary object
                         with a write method
                version -- PDF version to write in the header.  The
                           default is the version of the document.
                compress -- True to compress unfiltered streams
                            with FlateDecode on output.
        """
        self.fname = fname
        self.version = version
        self.compress = compress

    def write(self, document, fname=None, disable_gc=True):

        if (fname is not None) == (self.fname is not None):
            raise PdfOutputError(
                "PdfWriter fname must be specified exactly once")

        fname = fname or self.fname
        version = self.version or document.version

        # Dump the data.  We either have a filename or a preexisting
        # file object.
        if not hasattr(fname, 'write'):
            # Format first, so a failure leaves no partial file behind
            data = serialize(document, version, self.compress, disable_gc)
            with open(fname, 'wb') as f:
                f.write(data)
            return

        if disable_gc:
            gc.disable()
        try:
            FormatObjects(fname, document, version, self.compress)
        finally:
            if disable_gc:
                gc.enable()


def serialize(document, version=None, compress=False, disable_gc=True):
    ''' Return the bytes of a complete PDF file for document.
    '''
    f = BytesIO()
    PdfWriter(version=version, compress=compress).write(document, f,
                                                        disable_gc)
    return f.getvalue()
