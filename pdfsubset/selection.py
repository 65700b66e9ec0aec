# A part of pdfsubset
# MIT license -- See LICENSE.txt for details

'''
PageSelection holds the ordered list of page indices that a user
has picked, until it is handed to extract().

Indices are 0-based.  The order in which pages are added is the
order they will appear in the output, and adding a page twice
puts it in the output twice.
'''

from .errors import IndexOutOfRange


def checkindex(index, page_count=None, isinstance=isinstance):
    ''' An index is an int (not a bool), at least 0, and below
        page_count when that is known.
    '''
    if (isinstance(index, bool) or not isinstance(index, int) or index < 0 or
            (page_count is not None and index >= page_count)):
        raise IndexOutOfRange(index, page_count)


class PageSelection(object):

    def __init__(self, page_count=None, indices=()):
        self.page_count = page_count
        self.indices = []
        for index in indices:
            self.add(index)

    def __repr__(self):
        return 'PageSelection(%r, %r)' % (self.page_count, self.indices)

    def __len__(self):
        return len(self.indices)

    def __iter__(self):
        return iter(self.indices)

    def __contains__(self, index):
        return index in self.indices

    def add(self, index):
        ''' Append a page.  If the page count is known, the index
            is checked right away.
        '''
        checkindex(index, self.page_count)
        self.indices.append(index)
        return self

    def remove(self, index):
        ''' Remove every occurrence of a page.  Removing a page
            that is not selected does nothing.
        '''
        self.indices = [x for x in self.indices if x != index]
        return self

    def toggle(self, index):
        ''' Checkbox behavior: deselect the page if it is
            selected, otherwise select it.
        '''
        if index in self.indices:
            return self.remove(index)
        return self.add(index)

    def clear(self):
        del self.indices[:]
        return self

    def to_ordered_sequence(self):
        return tuple(self.indices)

    def validate(self, page_count):
        ''' Check every index against page_count, and remember
            the page count for later additions.
        '''
        for index in self.indices:
            checkindex(index, page_count)
        self.page_count = page_count
        return self

    @classmethod
    def from_ranges(cls, ranges, page_count=None):
        ''' Build a selection from human-readable, 1-based page
            ranges such as ['1-3', '5'] or '1-3,5'.  A range
            written backwards ('5-3') selects pages in reverse.
        '''
        if isinstance(ranges, str):
            ranges = ranges.split(',')
        self = cls(page_count)
        for onerange in ranges:
            onerange = onerange.strip()
            if not onerange:
                continue
            try:
                bounds = [int(x) for x in onerange.split('-')]
            except ValueError:
                raise ValueError('Invalid page range %r' % onerange)
            if len(bounds) not in (1, 2):
                raise ValueError('Invalid page range %r' % onerange)
            first, last = (bounds + bounds[-1:])[:2]
            step = 1 if last >= first else -1
            for pagenum in range(first, last + step, step):
                self.add(pagenum - 1)
        return self
