# A part of pdfsubset, derived from pdfrw (https://github.com/pmaupin/pdfrw)
# Copyright (C) 2006-2015 Patrick Maupin, Austin, Texas
# Copyright (C) 2012-2015 Nerijus Mika
# MIT license -- See LICENSE.txt for details

'''
The PdfReader class reads an entire PDF file into memory, parses
the cross-reference data, and then loads every indirect object into
a Document.  (It does not parse into content streams.)

Everything is read eagerly, so that once parse() returns, the
Document is complete and is never touched again.
'''
import gc
import itertools

from .errors import PdfParseError, MalformedStructure, UnsupportedVersion, log
from .tokens import PdfTokens
from .objects import PdfDict, PdfArray, PdfName, PdfObject, PdfIndirect
from .uncompress import uncompress
from .document import Document
from .convert import convert_load, convert_store


class PdfReader(object):

    def findindirect(self, objnum, gennum, PdfIndirect=PdfIndirect, int=int):
        ''' Return a reference to an indirect object.
        '''
        return PdfIndirect(int(objnum), int(gennum))

    def readarray(self, source, PdfArray=PdfArray):
        ''' Found a [ token.  Parse the tokens after that.
        '''
        specialget = self.special.get
        result = []
        pop = result.pop
        append = result.append

        for value in source:
            if value in ']R':
                if value == ']':
                    break
                generation = pop()
                value = self.findindirect(pop(), generation)
            else:
                func = specialget(value)
                if func is not None:
                    value = func(source)
            append(value)
        return PdfArray(result)

    def readdict(self, source, PdfDict=PdfDict):
        ''' Found a << token.  Parse the tokens after that.
        '''
        specialget = self.special.get
        result = PdfDict()
        next = source.next

        tok = next()
        while tok != '>>':
            if not tok.startswith('/'):
                source.error('Expected PDF /name object')
                tok = next()
                continue
            key = tok
            value = next()
            func = specialget(value)
            if func is not None:
                value = func(source)
                tok = next()
            else:
                tok = next()
                if value.isdigit() and tok.isdigit():
                    tok2 = next()
                    if tok2 != 'R':
                        source.error('Expected "R" following two integers')
                        tok = tok2
                        continue
                    value = self.findindirect(value, tok)
                    tok = next()
            result[key] = value
        return result

    def empty_obj(self, source, PdfObject=PdfObject):
        ''' Some generators put an empty object in the
            file.  Back up so the caller sees the endobj.
        '''
        source.floc = source.tokstart
        return PdfObject('null')

    def badtoken(self, source):
        ''' Didn't see that coming.
        '''
        source.exception('Unexpected delimiter')

    def findstream(self, obj, tok, source, len=len):
        ''' Figure out if there is a content stream
            following an object, and return the start
            pointer to the content stream if so.

            (We can't read it yet, because we might not
            know how long it is, because Length might
            be an indirect object.)
        '''

        fdata = source.fdata
        startstream = source.tokstart + len(tok)
        gotcr = fdata[startstream:startstream + 1] == '\r'
        startstream += gotcr
        gotlf = fdata[startstream:startstream + 1] == '\n'
        startstream += gotlf
        if not gotlf:
            if not gotcr:
                source.error(r'stream keyword not followed by \n')
            else:
                source.warning(r"stream keyword terminated "
                               r"by \r without \n")
        return startstream

    def streamlength(self, obj, source):
        ''' Return the /Length of a stream, loading the
            length object first if it is indirect.
        '''
        length = obj.Length
        if isinstance(length, PdfIndirect):
            length = self.getobject(length)
        try:
            return int(length)
        except (TypeError, ValueError):
            source.error('Invalid stream /Length %r', length)
            return -1

    def readstream(self, obj, startstream, source, exact_required=False,
                   streamending='endstream endobj'.split()):
        fdata = source.fdata
        length = self.streamlength(obj, source)
        if length >= 0:
            source.floc = target_endstream = startstream + length
            endit = source.multiple(2)
            obj._stream = fdata[startstream:target_endstream]
            if endit == streamending:
                return
        else:
            target_endstream = startstream

        if exact_required:
            source.exception('Expected endstream endobj')

        # The length attribute does not match the distance between the
        # stream and endstream keywords.

        maxstream = len(fdata)
        endstream = fdata.find('endstream', startstream, maxstream)
        source.floc = startstream
        room = endstream - startstream
        if endstream < 0:
            source.exception('Could not find endstream')
        if (length == room + 1 and
                fdata[startstream - 2:startstream] == '\r\n'):
            source.warning(r"stream keyword terminated by \r without \n")
            obj._stream = fdata[startstream - 1:target_endstream - 1]
            source.floc = endstream
            source.multiple(2)
            return
        source.floc = endstream
        source.multiple(2)
        data = fdata[startstream:endstream]
        # The EOL before endstream is not part of the data
        if data.endswith('\r\n'):
            data = data[:-2]
        elif data.endswith('\n') or data.endswith('\r'):
            data = data[:-1]
        if length > room:
            source.error('stream /Length attribute (%d) appears to '
                         'be too big (size %d) -- adjusting',
                         length, room)
        else:
            source.error('stream /Length attribute (%d) appears to '
                         'be wrong (size %d) -- adjusting',
                         length, room)
        obj.stream = data

    def readobject(self, source):
        ''' Read one object, and call special code if it starts
            an array or dictionary.
        '''
        obj = source.next()
        func = self.special.get(obj)
        if func is not None:
            obj = func(source)
        return obj

    def loadindirect(self, key, offset):
        ''' Read the indirect object that the cross-reference
            data says lives at offset.  Returns None if it
            cannot be found.
        '''
        source = self.source

        # Read the object header and validate it
        objnum, gennum = key
        source.floc = offset
        objid = source.multiple(3)
        ok = len(objid) == 3
        ok = ok and objid[0].isdigit() and int(objid[0]) == objnum
        ok = ok and objid[1].isdigit() and int(objid[1]) == gennum
        ok = ok and objid[2] == 'obj'
        if not ok:
            objheader = '%d %d obj' % (objnum, gennum)
            fdata = source.fdata
            offset2 = (fdata.find('\n' + objheader) + 1 or
                       fdata.find('\r' + objheader) + 1)
            if (not offset2 or
                    fdata.find(fdata[offset2 - 1] + objheader, offset2) > 0):
                source.warning("Expected indirect object '%s'", objheader)
                return None
            source.warning("Indirect object %s found at incorrect "
                           "offset %d (expected offset %d)",
                           objheader, offset2, offset)
            source.floc = offset2 + len(objheader)

        obj = self.readobject(source)
        tok = source.next_default('')
        if tok == 'endobj':
            return obj

        # Should be a stream.  Either that or it's broken.
        isdict = isinstance(obj, PdfDict)
        if isdict and tok == 'stream':
            self.readstream(obj, self.findstream(obj, tok, source), source)
            return obj

        # Leaving out a space before endobj is apparently an easy
        # mistake to make on generation, and it is so common that
        # viewers just handle it.

        if isinstance(obj, PdfObject) and obj.endswith('endobj'):
            source.error('No space or delimiter before endobj')
            obj = PdfObject(obj[:-6])
        else:
            source.error("Expected 'endobj'%s token",
                         isdict and " or 'stream'" or '')
        return obj

    def getobject(self, key, PdfIndirect=PdfIndirect):
        ''' Return the object for key, loading it if required.
            Returns None for objects that are free or missing.
        '''
        key = PdfIndirect(key)
        objects = self.indirect_objects
        if key in objects:
            return objects[key]
        entry = self.xref.get(key[0])
        if entry is None or entry[0] == 'f' or entry[1] != key[1]:
            return None
        if key in self.loading:
            self.source.error('Object %d %d R refers to itself '
                              'while loading', *key)
            return None
        self.loading.add(key)
        kind = entry[0]
        if kind == 'n':
            obj = self.loadindirect(key, entry[2])
        else:
            obj = self.load_stream_object(entry[2], key)
        self.loading.discard(key)
        objects[key] = obj
        return obj

    def load_stream_object(self, stmnum, key):
        ''' Return an object stored inside object stream stmnum.
            The whole object stream is parsed the first time
            any of its members is asked for.
        '''
        members = self.object_streams.get(stmnum)
        if members is None:
            members = self.object_streams[stmnum] = {}
            container = self.getobject((stmnum, 0))
            if (not isinstance(container, PdfDict) or
                    container.Type != PdfName.ObjStm or
                    container.stream is None):
                self.source.error('Object %d 0 R is not an object stream',
                                  stmnum)
                return None
            # The container is dropped from the document, so it
            # is safe to decompress it in place.
            if not uncompress([container]):
                self.source.error('Could not decompress object stream %d',
                                  stmnum)
                return None
            objsource = PdfTokens(container.stream, 0, False, self.verbose)
            next = objsource.next
            offsets = []
            firstoffset = int(container.First)
            count = int(container.N or 0)
            for _ in range(count):
                offsets.append((int(next()), firstoffset + int(next())))
            for num, offset in offsets:
                objsource.floc = offset
                members[num] = self.readobject(objsource)
        return members.get(key[0])

    def read_all(self):
        for objnum, entry in sorted(self.xref.items()):
            if entry[0] in 'nc':
                self.getobject((objnum, entry[1]))

    def findxref(self, fdata):
        ''' Find the cross reference section at the end of a file
        '''
        startloc = fdata.rfind('startxref')
        if startloc < 0:
            raise MalformedStructure('Did not find "startxref" at end of '
                                     'file')
        source = PdfTokens(fdata, startloc, False, self.verbose)
        tok = source.next()
        assert tok == 'startxref'  # (We just checked this...)
        tableloc = source.next_default()
        if not tableloc.isdigit():
            source.exception('Expected table location')
        if source.next_default().rstrip().lstrip('%') != 'EOF':
            source.exception('Expected %%EOF')
        return startloc, PdfTokens(fdata, int(tableloc), True, self.verbose)

    def parse_xref_stream(self, source, entries):
        ''' Parse a cross-reference stream, adding its
            entries to the entries dict.
        '''

        def readint(s, lengths):
            offset = 0
            for length in itertools.cycle(lengths):
                next = offset + length
                yield int.from_bytes(s[offset:next], 'big') if length else None
                offset = next

        # check for xref stream object
        objid = source.multiple(4)
        ok = len(objid) == 4
        ok = ok and objid[0].isdigit() and objid[1].isdigit()
        ok = ok and objid[2] == 'obj'
        ok = ok and objid[3] == '<<'
        if not ok:
            source.exception('Expected xref stream start')
        obj = self.readdict(source)
        if obj.Type != PdfName.XRef:
            source.exception('Expected dict type of /XRef')
        if isinstance(obj.Length, PdfIndirect):
            source.exception('Xref stream /Length must be a direct object')
        tok = source.next()
        self.readstream(obj, self.findstream(obj, tok, source), source, True)
        if not uncompress([obj], True):
            source.exception('Could not decompress Xref stream')
        stream = obj.stream
        if isinstance(stream, str):
            # Not actually compressed
            stream = convert_store(stream)
        num_pairs = obj.Index or PdfArray(['0', obj.Size])
        num_pairs = [int(x) for x in num_pairs]
        num_pairs = list(zip(num_pairs[0::2], num_pairs[1::2]))
        entry_sizes = [int(x) for x in obj.W]
        if len(entry_sizes) != 3:
            source.exception('Invalid entry size')
        if len(stream) < sum(entry_sizes) * sum(x[1] for x in num_pairs):
            source.exception('Xref stream is truncated')
        get = readint(stream, entry_sizes)
        setdefault = entries.setdefault
        for objnum, size in num_pairs:
            for cnt in range(size):
                xtype, p1, p2 = itertools.islice(get, 3)
                if xtype in (1, None):
                    if p1:
                        setdefault(objnum, ('n', p2 or 0, p1))
                elif xtype == 2:
                    setdefault(objnum, ('c', 0, p1))
                elif xtype == 0:
                    setdefault(objnum, ('f', p2 or 0, 0))
                objnum += 1
        return obj

    def read_xref_rows(self, source, entries, free):
        next = source.next
        while 1:
            tok = next()
            if tok == 'trailer':
                return
            startobj = int(tok)
            for objnum in range(startobj, startobj + int(next())):
                offset = int(next())
                generation = int(next())
                inuse = next()
                if inuse == 'n':
                    if offset != 0:
                        entries.setdefault(objnum, ('n', generation, offset))
                elif inuse == 'f':
                    free.append((objnum, ('f', generation, 0)))
                else:
                    raise ValueError(inuse)

    def parse_xref_table(self, source, entries, free):
        ''' Parse a classic cross-reference table.  In-use entries
            go in the entries dict, free ones in the free list.
        '''
        start = source.floc
        try:
            self.read_xref_rows(source, entries, free)
            return
        except (ValueError, StopIteration):
            entries.clear()
            del free[:]

        # Table formatted incorrectly.
        # See if we can figure it out anyway.
        end = source.fdata.find('trailer', start)
        if end < 0:
            source.floc = start
            source.exception('Invalid table format')
        table = source.fdata[start:end].splitlines()
        objnum = None
        try:
            for line in table:
                tokens = line.split()
                if len(tokens) == 2:
                    objnum = int(tokens[0])
                elif len(tokens) == 3 and objnum is not None:
                    offset, generation, inuse = (int(tokens[0]),
                                                 int(tokens[1]), tokens[2])
                    if offset != 0 and inuse == 'n':
                        entries.setdefault(objnum, ('n', generation, offset))
                    objnum += 1
                elif tokens:
                    log.error('Invalid line in xref table: %s' %
                              repr(line))
                    raise ValueError(line)
        except ValueError:
            source.floc = start
            source.exception('Invalid table format')
        log.warning('Badly formatted xref table')
        source.floc = end
        source.next()

    def parsexref(self, source):
        ''' Parse (one of) the cross-reference file section(s).
            Returns the section's entries and its trailer.
        '''
        entries = {}
        next = source.next
        tok = source.next_default('')
        if tok.isdigit():
            source.floc = source.tokstart
            trailer = self.parse_xref_stream(source, entries)
        elif tok == 'xref':
            free = []
            self.parse_xref_table(source, entries, free)
            tok = next()
            if tok != '<<':
                source.exception('Expected "<<" starting trailer')
            trailer = self.readdict(source)
            xrefstm = trailer.XRefStm
            if xrefstm is not None:
                # Hybrid file: entries the table does not
                # define come from the xref stream.
                source.floc = int(xrefstm)
                self.parse_xref_stream(source, entries)
            for objnum, entry in free:
                entries.setdefault(objnum, entry)
        else:
            source.exception('Expected "xref" keyword or xref stream object')
        return entries, trailer

    def readxrefs(self, source):
        ''' Follow the chain of cross-reference sections from
            the last one in the file back to the first.  Newer
            entries win, and the newest trailer wins.
        '''
        xref = {}
        trailer = None
        seen = set()
        while 1:
            floc = source.floc
            if floc in seen:
                source.exception('Loop in /Prev chain of xref sections')
            seen.add(floc)
            entries, section_trailer = self.parsexref(source)
            for objnum, entry in entries.items():
                xref.setdefault(objnum, entry)
            if trailer is None:
                trailer = section_trailer
            else:
                for key, value in section_trailer.items():
                    if key not in trailer:
                        trailer[key] = value
            prev = section_trailer.Prev
            if prev is None:
                break
            try:
                source.floc = int(prev)
            except ValueError:
                source.exception('Invalid /Prev offset %r', prev)
        trailer.Prev = None
        trailer.XRefStm = None
        return xref, trailer

    def readpdf(self, fdata):
        if not fdata.startswith('%PDF-'):
            startloc = fdata.find('%PDF-')
            if startloc >= 0:
                log.warning('PDF header not at beginning of file')
            else:
                lines = fdata.lstrip().splitlines()
                if not lines:
                    raise MalformedStructure('Empty PDF file!')
                raise MalformedStructure('Invalid PDF header: %s' %
                                         repr(lines[0][:20]))
        else:
            startloc = 0

        version = fdata[startloc + 5:startloc + 8]
        if not (version[:1].isdigit() and version[1:2] == '.' and
                version[2:3].isdigit()):
            raise MalformedStructure('Invalid PDF version %r' % version)

        endloc = fdata.rfind('%EOF')
        if endloc < 0:
            raise MalformedStructure('EOF mark not found: %s' %
                                     repr(fdata[-20:]))
        endloc += 6
        junk = fdata[endloc:]
        fdata = fdata[:endloc]
        if junk.rstrip('\00').strip():
            log.warning('Extra data at end of file')

        self.indirect_objects = {}
        self.object_streams = {}
        self.loading = set()
        self.special = {'<<': self.readdict,
                        '[': self.readarray,
                        'endobj': self.empty_obj,
                        }
        for tok in r'\ ( ) < > { } ] >> %'.split():
            self.special[tok] = self.badtoken

        xrefloc, source = self.findxref(fdata)
        self.source = source
        self.xref, trailer = self.readxrefs(source)

        if trailer.Encrypt is not None:
            raise UnsupportedVersion('Encrypted PDF documents are not '
                                     'supported')

        root = trailer.Root
        if not isinstance(root, PdfIndirect):
            raise MalformedStructure('Trailer has no /Root reference')

        self.read_all()

        # Cross-reference and object streams are containers
        # for structure, not part of the document proper.
        containers = set(PdfIndirect(x, 0) for x in self.object_streams)
        objects = {}
        for key, obj in self.indirect_objects.items():
            if obj is None or key in containers:
                continue
            if isinstance(obj, PdfDict) and obj.Type == PdfName.XRef:
                continue
            objects[key] = obj

        if root not in objects:
            raise MalformedStructure('Document catalog %d %d R not found' %
                                     root)

        info = trailer.Info
        if isinstance(info, PdfIndirect) and info not in objects:
            log.warning('Trailer /Info refers to missing object '
                        '%d %d R; ignoring it' % info)
            info = None

        catalog_version = objects[root].Version if isinstance(
            objects[root], PdfDict) else None
        if catalog_version is not None:
            catalog_version = catalog_version.lstrip('/')
            try:
                if float(catalog_version) > float(version):
                    version = catalog_version
            except ValueError:
                source.warning('Invalid catalog /Version %r', catalog_version)

        document = Document(objects, root, info, version)
        document.check()
        return document

    def __init__(self, fname=None, fdata=None, verbose=True,
                 disable_gc=True):
        self.verbose = verbose

        if fname is not None:
            assert fdata is None
            # Allow reading preexisting streams
            if hasattr(fname, 'read'):
                fdata = fname.read()
            else:
                try:
                    with open(fname, 'rb') as f:
                        fdata = f.read()
                except IOError:
                    raise PdfParseError('Could not read PDF file %s' %
                                        fname)
        elif hasattr(fdata, 'read'):
            fdata = fdata.read()

        if fdata is None:
            raise TypeError('PdfReader needs a file name or PDF data')
        fdata = convert_load(fdata)

        # Runs a lot faster with GC off.
        disable_gc = disable_gc and gc.isenabled()
        if disable_gc:
            gc.disable()
        try:
            self.document = self.readpdf(fdata)
        except StopIteration:
            raise MalformedStructure('Unexpected end of PDF data')
        except (ValueError, TypeError, IndexError) as exc:
            raise MalformedStructure('Invalid PDF structure: %s' % exc)
        finally:
            if disable_gc:
                gc.enable()


def parse(fdata, verbose=True):
    ''' Parse a complete PDF (bytes, or a binary file object)
        into a Document.  Raises MalformedStructure or
        UnsupportedVersion; never returns a partial Document.
    '''
    return PdfReader(fdata=fdata, verbose=verbose).document
