# A part of pdfsubset, derived from pdfrw (https://github.com/pmaupin/pdfrw)
# Copyright (C) 2006-2015 Patrick Maupin, Austin, Texas
# MIT license -- See LICENSE.txt for details

'''
PDF names.

A name read from a file may contain #xx escapes (section 3.2.4 of
the PDF reference).  The decoded form is what compares equal in a
dictionary; the escaped form, when it differs, is kept on the
"encoded" attribute for the writer.
'''

import re

NAME_SPECIALS = '\x00 \t\f\r\n()<>{}[]/%#'

_split_escapes = re.compile(r'\#([0-9A-Fa-f]{2})').split
_split_specials = re.compile(
    '([%s])' % re.escape(NAME_SPECIALS)).split


def decode_name(encoded, join=''.join, chr=chr, int=int):
    ''' Replace #xx escapes in a name from a file
    '''
    parts = _split_escapes(encoded)
    parts[1::2] = (chr(int(x, 16)) for x in parts[1::2])
    return join(parts)


def encode_name(name, join=''.join, ord=ord):
    ''' Escape whitespace, delimiters and # after the leading slash
    '''
    parts = _split_specials(name[1:])
    parts[1::2] = ('#%02X' % ord(x) for x in parts[1::2])
    return name[:1] + join(parts)


class BasePdfName(str):
    ''' A name, starting with a slash.  The tokenizer builds
        these from file text (pre_encoded); PdfName builds them
        from plain strings.
    '''

    encoded = None

    def __new__(cls, name, pre_encoded=True, new=str.__new__):
        if name[1:].isalnum():
            return new(cls, name)
        if pre_encoded:
            encoded = name
            if '#' in name:
                name = decode_name(name)
        else:
            encoded = encode_name(name)
        self = new(cls, name)
        if encoded != name:
            self.encoded = encoded
        return self


class PdfName(object):
    ''' PdfName.Resources and PdfName('Resources') both
        return the name "/Resources".
    '''

    def __getattr__(self, name, BasePdfName=BasePdfName):
        return BasePdfName('/' + name, False)

    def __call__(self, name, BasePdfName=BasePdfName):
        return BasePdfName('/' + name, False)


PdfName = PdfName()
