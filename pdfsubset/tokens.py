# A part of pdfsubset, derived from pdfrw (https://github.com/pmaupin/pdfrw)
# Copyright (C) 2006-2015 Patrick Maupin, Austin, Texas
# MIT license -- See LICENSE.txt for details

'''
A tokenizer for PDF files and object streams.

The lexical rules come from the "PDF reference", sixth edition,
for PDF version 1.7, section 3.1.  The tokenizer works on latin-1
decoded text, so every byte is exactly one character and token
positions are file offsets.

Tokens come back as:

    BasePdfName   for /Names
    PdfString     for (literal) and <hex> strings
    PdfObject     for numbers, keywords, and other "regular" runs
    str           for delimiters such as [ ] << >> (interned)

'''

import re
import itertools
from sys import intern

from .objects import PdfString, PdfObject
from .objects.pdfname import BasePdfName
from .errors import log, MalformedStructure

# Table 3.1
EOL = '\n\r'
WHITESPACE = '\x00 \t\f' + EOL

# The ] is escaped for use inside a character class
DELIMITERS = r'()<>{}[\]/%'

P_REGULAR = r'(?:[^\\%s%s]+|\\[^%s])+' % (WHITESPACE, DELIMITERS,
                                          WHITESPACE)
P_NAME = r'/[^%s%s]*' % (DELIMITERS, WHITESPACE)
P_HEX_STRING = r'\<[%s0-9A-Fa-f]*\>' % WHITESPACE
P_DICT_DELIM = r'\<\<|\>\>'
P_COMMENT = r'\%%[^%s]*' % EOL
P_ANYTHING = '[^%s]' % WHITESPACE

# Literal strings are matched up to the first unescaped paren.
# When that paren is an opening one, the rest of the string is
# picked up a piece at a time with P_LITERAL_MORE, which hangs
# without its trailing ?.
P_LITERAL = r'\((?:[^\\()]+|\\.)*[()]?'
P_LITERAL_MORE = r'(?:[^\\()]+|\\.)*[()]?'


def tokenfinder(*patterns):
    ''' Return a finditer for the alternation of patterns,
        with the token in group 1 and trailing whitespace
        consumed by the match.
    '''
    return re.compile('(%s)[%s]*' % ('|'.join(patterns), WHITESPACE),
                      re.DOTALL).finditer


findtok = tokenfinder(P_REGULAR, P_NAME, P_HEX_STRING, P_DICT_DELIM,
                      P_LITERAL, P_COMMENT, P_ANYTHING)
findparen = tokenfinder(P_LITERAL_MORE)


def linepos(fdata, loc):
    ''' Return (line, column) of a file offset, both 1-based.
        Any of CR, LF or CR LF ends a line.
    '''
    line = fdata.count('\n', 0, loc) + 1
    line += fdata.count('\r', 0, loc) - fdata.count('\r\n', 0, loc)
    col = loc - max(fdata.rfind('\n', 0, loc), fdata.rfind('\r', 0, loc))
    return line, col


class PdfTokens(object):
    ''' Iterate over the tokens of fdata, starting at startloc.

        The position can be moved at any time by assigning to
        floc; the next token is then read from there.
    '''

    def __init__(self, fdata, startloc=0, strip_comments=True, verbose=True):
        self.fdata = fdata
        self.strip_comments = strip_comments

        # (start of last token, where the next token will be read)
        self.current = [(startloc, startloc)]
        self.iterator = iterator = self._gettoks()
        self.next = iterator.__next__

        # None means log everything; otherwise, messages already logged
        self.msgs_dumped = None if verbose else set()

    def _gettoks(self, findtok=findtok, delimiters=DELIMITERS,
                 PdfObject=PdfObject, PdfString=PdfString,
                 BasePdfName=BasePdfName):
        ''' Generate tokens from the location held in self.current.

            Whenever self.current is moved, either by a caller
            or by a literal string that needed more scanning,
            the finditer is dropped and a new one started from
            the new location.
        '''
        fdata = self.fdata
        current = self.current
        cache = {}
        while 1:
            for match in findtok(fdata, current[0][1]):
                current[0] = tokspan = match.span()
                token = match.group(1)
                firstch = token[0]
                if firstch not in delimiters:
                    maketoken = PdfObject
                elif firstch == '/':
                    maketoken = BasePdfName
                elif firstch == '<' and token[1:2] != '<':
                    maketoken = PdfString
                elif firstch == '(':
                    maketoken = PdfString
                    if fdata[match.end(1) - 1] != ')':
                        token = self._nested_literal(*tokspan)
                elif firstch == '%' and self.strip_comments:
                    continue
                else:
                    maketoken = intern

                newtok = cache.get(token)
                if newtok is None:
                    newtok = cache[token] = maketoken(token)
                yield newtok
                if current[0] is not tokspan:
                    break
            else:
                return

    def _nested_literal(self, start, loc, findparen=findparen):
        ''' Finish a literal string that has nested parentheses,
            or that runs off the end of the data.  The string
            began at start and the scan resumes at loc.
        '''
        fdata = self.fdata
        current = self.current
        nest = 2
        end = loc
        ends = None
        for match in findparen(fdata, loc):
            loc, end = match.end(1), match.end()
            closing = fdata[loc - 1] == ')'
            nest += 1 - closing * 2
            if not nest:
                break
            if closing and ends is None:
                ends = loc, end, nest
        current[0] = start, end
        if not nest:
            return fdata[start:loc]

        # Some generators don't escape an unbalanced (.  The string
        # is closed at the first unescaped ) when there is one.
        if ends is None:
            self.exception('Unterminated literal string')
        self.error('Unterminated literal string')
        loc, end, nest = ends
        current[0] = start, end
        return fdata[start:loc] + ')' * nest

    def setstart(self, startloc):
        current = self.current
        if startloc != current[0][1]:
            current[0] = startloc, startloc

    def floc(self):
        ''' Where the next token will be read from
        '''
        return self.current[0][1]
    floc = property(floc, setstart)

    def tokstart(self):
        ''' Where the most recently read token began
        '''
        return self.current[0][0]
    tokstart = property(tokstart, setstart)

    def __iter__(self):
        return self.iterator

    def multiple(self, count, islice=itertools.islice, list=list):
        return list(islice(self, count))

    def next_default(self, default='nope'):
        for result in self:
            return result
        return default

    def msg(self, msg, *arg):
        ''' Format msg with the line, column and text of the
            current token.  Returns None for a message that
            was already reported when verbose is off.
        '''
        dumped = self.msgs_dumped
        if dumped is not None:
            if msg in dumped:
                return None
            dumped.add(msg)
        if arg:
            msg %= arg
        fdata = self.fdata
        begin, end = self.current[0]
        if begin >= len(fdata):
            return '%s (filepos %s past EOF %s)' % (msg, begin, len(fdata))
        line, col = linepos(fdata, begin)
        if end <= begin:
            return '%s (line=%d, col=%d)' % (msg, line, col)
        tok = fdata[begin:end].rstrip()
        if len(tok) > 30:
            tok = tok[:26] + ' ...'
        return '%s (line=%d, col=%d, token=%r)' % (msg, line, col, tok)

    def warning(self, *arg):
        s = self.msg(*arg)
        if s:
            log.warning(s)

    def error(self, *arg):
        s = self.msg(*arg)
        if s:
            log.error(s)

    def exception(self, *arg):
        self.msgs_dumped = None
        raise MalformedStructure(self.msg(*arg))
