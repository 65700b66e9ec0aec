# A part of pdfsubset, derived from pdfrw (https://github.com/pmaupin/pdfrw)
# Copyright (C) 2006-2015 Patrick Maupin, Austin, Texas
# MIT license -- See LICENSE.txt for details

'''
PDF data is handled internally as latin-1 text, so that every
byte maps to exactly one character and the regular-expression
tokenizer can work on str.  These two functions cross that
boundary.
'''


def convert_load(s):
    if isinstance(s, (bytes, bytearray, memoryview)):
        return bytes(s).decode('Latin-1')
    return s


def convert_store(s):
    if isinstance(s, str):
        return s.encode('Latin-1')
    return bytes(s)
