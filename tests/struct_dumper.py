#! /usr/bin/env python
# A part of pdfsubset, derived from pdfrw (https://github.com/pmaupin/pdfrw)
# Copyright (C) 2006-2015 Patrick Maupin, Austin, Texas
# MIT license -- See LICENSE.txt for details

'''
Dump the object graph below a page as a sorted list of lines,
with references replaced by the path where the object was first
seen.  Two pages have the same dump exactly when they have the
same structure, whatever the object numbers are.

Run from the directory above like so:
python -m tests.struct_dumper somefile.pdf
'''

import sys

from pdfsubset import PdfDict, PdfArray, PdfIndirect, PdfName, PdfReader


def effective_page(doc, index):
    ''' The page dictionary with its inherited attributes filled
        in and its /Parent removed.
    '''
    ref = doc.pages[index]
    page = PdfDict(doc.resolve(ref))
    page.Parent = None
    for name in doc.inheritable:
        if page.get(name) is None:
            page[name] = doc.inherited(ref, name)
    page.Type = PdfName.Page
    return page


def dump(doc, obj, skip=('/Parent',)):
    def output(*stuff):
        outlist.append(' '.join(str(x) for x in stuff))

    allobjs = {}
    outlist = []
    q = []
    queue = q.append
    queue(('', obj))

    for name, obj in q:
        if isinstance(obj, PdfIndirect):
            prior = allobjs.setdefault(obj, name)
            if prior is not name:
                output(name, '-->', prior)
                continue
            obj = doc.resolve(obj)
        if isinstance(obj, PdfArray):
            objlen = len(obj)
            digits = 1 if objlen < 10 else (2 if objlen < 100 else 3)
            fmt = name + '[%%0%dd]' % digits
            for i, subobj in enumerate(obj):
                queue((fmt % i, subobj))
            output(name, ':', len(obj), 'entry array')
        elif isinstance(obj, PdfDict):
            stream = obj.stream
            for key, subobj in obj.items():
                if key in skip:
                    continue
                if stream is not None and key == '/Length':
                    continue
                queue((name + key, subobj))
            if stream is not None:
                output(name, '.stream =', repr(stream))
            output(name, ':', len(obj), 'entry dict')
        else:
            output(name, '=', repr(obj))

    return sorted(outlist)


def dump_page(doc, index, skip=('/Parent',)):
    return dump(doc, effective_page(doc, index), skip)


def go(fname):
    doc = PdfReader(fname).document
    for index in range(doc.page_count):
        print('Page %d' % (index + 1))
        for line in dump_page(doc, index):
            print('   ', line)


if __name__ == '__main__':
    go(sys.argv[1])
