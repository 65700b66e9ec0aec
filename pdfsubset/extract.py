# A part of pdfsubset
# MIT license -- See LICENSE.txt for details

'''
Page subset extraction.

extract() builds a brand new Document holding copies of the
selected pages, in the order given, and of every object those
pages depend on.  The source Document is only read.

Copying rules:

  - Every object reachable from a selected page is copied once
    per call, no matter how many selected pages use it, so shared
    fonts and images stay shared.
  - A page selected twice becomes two page objects that share
    everything below them.
  - /Parent goes to the new flat /Pages node, and inherited page
    attributes are written onto the page itself.
  - A reference to some page of the source (from an annotation,
    say) goes to the first copy of that page if it was selected,
    and becomes null otherwise.  The same goes for the source
    page tree nodes and catalog.  That way one page never pulls
    in the rest of the document.
'''

from .objects import PdfDict, PdfArray, PdfName, PdfObject, PdfNull, \
    PdfIndirect
from .errors import IndexOutOfRange, ResourceResolutionError, log
from .document import Document


class PageExtractor(object):
    ''' Holds the state of one extract() call: the objects built
        so far and the mapping from source keys to new keys.
    '''

    def __init__(self, source):
        self.source = source
        self.objects = {}
        self.remap = {}
        self.pagemap = {}
        self.work = []
        self.next_num = 1
        self.sourcepages = frozenset(source.pages)
        self.skipped = source.tree_nodes | set([source.root])

    def allocate(self):
        key = PdfIndirect(self.next_num, 0)
        self.next_num += 1
        return key

    def copyref(self, ref):
        pagemap = self.pagemap
        if ref in pagemap:
            return pagemap[ref]
        if ref in self.sourcepages or ref in self.skipped:
            return PdfNull
        result = self.remap.get(ref)
        if result is None:
            if ref not in self.source.objects:
                raise ResourceResolutionError(ref)
            result = self.remap[ref] = self.allocate()
            self.work.append((ref, result))
        return result

    def copyvalue(self, value, isinstance=isinstance,
                  length=PdfName.Length):
        ''' Copy a value, replacing references by references
            to the copies.  Direct containers are copied; the
            other PDF objects are immutable strings, and are
            shared.
        '''
        if isinstance(value, PdfIndirect):
            return self.copyref(value)
        if isinstance(value, PdfDict):
            result = PdfDict()
            stream = value.stream
            for key, subvalue in value.items():
                if stream is not None and key == length:
                    continue
                result[key] = self.copyvalue(subvalue)
            if stream is not None:
                result.stream = stream
            return result
        if isinstance(value, PdfArray):
            return PdfArray([self.copyvalue(x) for x in value])
        return value

    def drain(self):
        ''' Copy everything queued up by copyref.
        '''
        work = self.work
        objects = self.objects
        sourceobjs = self.source.objects
        while work:
            ref, newref = work.pop()
            objects[newref] = self.copyvalue(sourceobjs[ref])

    def copypage(self, ref, parent):
        source = self.source
        page = source.resolve(ref)
        result = PdfDict(page)
        result.Parent = None
        result = self.copyvalue(result)
        for name in source.inheritable:
            if page.get(name) is None:
                value = source.inherited(ref, name)
                if value is not None:
                    result[name] = self.copyvalue(value)
        if result.Resources is None:
            result.Resources = PdfDict()
        result.Type = PdfName.Page
        result.Parent = parent
        return result

    def extract(self, indices, info=True):
        source = self.source
        catalog = self.allocate()
        pagesref = self.allocate()
        pagerefs = [self.allocate() for index in indices]
        for index, newref in zip(indices, pagerefs):
            self.pagemap.setdefault(source.pages[index], newref)

        objects = self.objects
        for index, newref in zip(indices, pagerefs):
            objects[newref] = self.copypage(source.pages[index], pagesref)
            self.drain()

        objects[pagesref] = PdfDict(
            Type=PdfName.Pages,
            Kids=PdfArray(pagerefs),
            Count=PdfObject(len(pagerefs)),
        )
        objects[catalog] = PdfDict(Type=PdfName.Catalog, Pages=pagesref)

        newinfo = None
        if info and source.info is not None:
            newinfo = self.copyvalue(source.info)
            self.drain()

        log.debug('Extracted %d pages (%d objects) from %r',
                  len(pagerefs), len(objects), source)
        return Document(objects, catalog, newinfo, source.version)


def checkindices(indices, page_count):
    ''' Make sure every index names a page, before anything is
        copied.
    '''
    for index in indices:
        if (isinstance(index, bool) or not isinstance(index, int) or
                not 0 <= index < page_count):
            raise IndexOutOfRange(index, page_count)


def extract(source, indices, info=True):
    ''' Return a new Document containing the pages of source
        listed in indices (0-based, in that order, repeats
        allowed).  Raises IndexOutOfRange or
        ResourceResolutionError; the source is never modified.
    '''
    indices = list(indices)
    checkindices(indices, source.page_count)
    return PageExtractor(source).extract(indices, info)
