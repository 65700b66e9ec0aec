# A part of pdfsubset
# MIT license -- See LICENSE.txt for details

'''
The Document class is the in-memory model shared by the reader,
the page extractor and the writer.

A Document owns a flat table of indirect objects, keyed by
(object number, generation number).  Objects refer to each other
only through PdfIndirect keys into that table, so a Document can be
read, walked and copied from without ever being modified.  Once a
Document is built, nothing in this package changes it.
'''

from .objects import PdfDict, PdfArray, PdfName, PdfObject, PdfIndirect
from .errors import MalformedStructure, ResourceResolutionError


class Document(object):
    ''' A parsed (or newly built) PDF document.

        objects -- dict mapping (objnum, gennum) to object values
        root    -- reference to the document catalog
        info    -- reference to (or direct) document information
                   dictionary, or None
        version -- PDF version string, e.g. '1.4'

        The page tree is walked once, when the Document is built.
        pages holds the page references in document order, and
        tree_nodes the references of the intermediate /Pages nodes.
    '''

    inheritable = (PdfName.Resources, PdfName.MediaBox,
                   PdfName.CropBox, PdfName.Rotate)

    def __init__(self, objects, root, info=None, version='1.3'):
        self.objects = objects
        self.root = PdfIndirect(root)
        self.info = info
        self.version = version
        self.pages, self.tree_nodes = self.readpages()

    def __repr__(self):
        return '<Document version=%s objects=%d pages=%d>' % (
            self.version, len(self.objects), self.page_count)

    @property
    def page_count(self):
        return len(self.pages)

    @property
    def size(self):
        ''' One more than the highest object number in use,
            which is what /Size in the trailer holds.
        '''
        return max([key[0] for key in self.objects] or [0]) + 1

    @property
    def trailer(self):
        return PdfDict(Size=PdfObject(self.size), Root=self.root,
                       Info=self.info)

    @property
    def catalog(self):
        return self.resolve(self.root)

    def __getitem__(self, key):
        return self.resolve(PdfIndirect(key))

    def __contains__(self, key):
        return tuple(key) in self.objects

    def resolve(self, value, isinstance=isinstance, PdfIndirect=PdfIndirect):
        ''' Follow a reference.  Anything that is not a reference
            is returned as-is.
        '''
        if isinstance(value, PdfIndirect):
            try:
                return self.objects[value]
            except KeyError:
                raise ResourceResolutionError(value)
        return value

    def page(self, index):
        return self.resolve(self.pages[index])

    def inherited(self, key, name):
        ''' Return the value of an inheritable page attribute,
            searching up the /Parent chain as required.  The value
            is returned unresolved; None if nobody defines it.
        '''
        visited = set()
        node = self.resolve(PdfIndirect(key))
        while node is not None:
            value = node.get(name)
            if value is not None:
                return value
            parent = node.Parent
            if parent is None or parent in visited:
                return None
            visited.add(parent)
            node = self.resolve(parent)
            if not isinstance(node, PdfDict):
                return None

    def references(self, value, skip=(), isinstance=isinstance):
        ''' Yield every reference inside value, looking through
            direct arrays and dictionaries.  Dictionary entries
            whose key is in skip are not followed.
        '''
        stack = [value]
        pop = stack.pop
        push = stack.append
        while stack:
            value = pop()
            if isinstance(value, PdfIndirect):
                yield value
            elif isinstance(value, PdfDict):
                for key, subvalue in value.items():
                    if key not in skip:
                        push(subvalue)
            elif isinstance(value, PdfArray):
                stack.extend(reversed(value))

    def reachable(self, key, skip=(PdfName.Parent,)):
        ''' Return the set of object keys reachable from key (which is
            included).  By default, /Parent links are not followed, so
            that starting from a page does not drag in the page tree.
        '''
        key = PdfIndirect(key)
        found = set([key])
        work = [key]
        while work:
            value = self.resolve(work.pop())
            for ref in self.references(value, skip):
                if ref not in found:
                    found.add(ref)
                    work.append(ref)
        return found

    def check(self):
        ''' Make sure that every reference reachable from the
            trailer points at an object in the table.
        '''
        try:
            for value in (self.root, self.info):
                if isinstance(value, PdfIndirect):
                    self.reachable(value, ())
                elif value is not None:
                    for ref in self.references(value):
                        self.reachable(ref, ())
        except ResourceResolutionError as exc:
            raise MalformedStructure('Dangling reference %d %d R' % exc.key)

    def readpages(self):
        ''' Walk the page tree depth first, left to right.
            Returns the tuple of /Page leaf references, and the
            set of intermediate /Pages node references.
        '''
        pagename = PdfName.Page
        pagesname = PdfName.Pages

        pages = []
        nodes = set()
        try:
            catalog = self.catalog
            if not isinstance(catalog, PdfDict):
                raise MalformedStructure('Document catalog is not a '
                                         'dictionary')
            top = catalog.Pages
            if not isinstance(top, PdfIndirect):
                raise MalformedStructure('Catalog /Pages is not an '
                                         'indirect reference')
            visited = set()
            stack = [top]
            while stack:
                ref = stack.pop()
                if not isinstance(ref, PdfIndirect):
                    raise MalformedStructure('Page tree node %r is not an '
                                             'indirect reference' % (ref,))
                if ref in visited:
                    raise MalformedStructure('Page tree loops back to '
                                             '%d %d R' % ref)
                visited.add(ref)
                node = self.resolve(ref)
                if not isinstance(node, PdfDict):
                    raise MalformedStructure('Page tree node %d %d R is '
                                             'not a dictionary' % ref)
                nodetype = node.Type
                if nodetype == pagename:
                    pages.append(ref)
                elif nodetype == pagesname or (
                        nodetype is None and node.Kids is not None):
                    kids = self.resolve(node.Kids)
                    if not isinstance(kids, PdfArray):
                        raise MalformedStructure('Page tree node %d %d R '
                                                 'has no /Kids array' % ref)
                    nodes.add(ref)
                    stack.extend(reversed(kids))
                elif nodetype is None:
                    pages.append(ref)
                else:
                    raise MalformedStructure('Expected /Page or /Pages '
                                             'dictionary, got %s' % nodetype)
        except ResourceResolutionError as exc:
            raise MalformedStructure('Page tree refers to missing object '
                                     '%d %d R' % exc.key)
        return tuple(pages), frozenset(nodes)
