#!/usr/bin/env python

'''
usage:   subset.py my.pdf page[range] [page[range]] ... [-o out.pdf]
         eg. subset.py my.pdf 3 1-2 1

Creates subset.my.pdf (or out.pdf), holding the selected pages
in the order given.  Page numbers start at 1.

'''

import sys
import os

from pdfsubset import (PdfReader, PdfWriter, PageSelection, PdfParseError,
                       ExtractError, extract)


def main(argv):
    args = list(argv)
    outfn = None
    if '-o' in args:
        where = args.index('-o')
        outfn = args[where + 1:where + 2]
        if not outfn:
            sys.stderr.write(__doc__)
            return 2
        outfn, = outfn
        del args[where:where + 2]
    if len(args) < 2:
        sys.stderr.write(__doc__)
        return 2

    inpfn = args[0]
    outfn = outfn or 'subset.%s' % os.path.basename(inpfn)

    try:
        source = PdfReader(inpfn).document
        selection = PageSelection.from_ranges(args[1:], source.page_count)
        PdfWriter(outfn).write(extract(source, selection))
    except (PdfParseError, ExtractError, ValueError) as exc:
        sys.stderr.write('%s: %s\n' % (type(exc).__name__, exc))
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main(sys.argv[1:]))
