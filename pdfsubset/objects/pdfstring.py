# A part of pdfsubset, derived from pdfrw (https://github.com/pmaupin/pdfrw)
# Copyright (C) 2006-2017 Patrick Maupin, Austin, Texas
#                    2016 James Laird-Wah, Sydney, Australia
# MIT license -- See LICENSE.txt for details

"""
PdfString encoding and decoding.

A PDF string is kept exactly as it was tokenized, delimiters
included: either a literal string in parentheses, or a hexadecimal
string in angle brackets.  Copying a page never needs to look inside
a string, so decoding is only done on request.

Literal strings use the backslash as an escape character:

  - \\n \\r \\t \\b \\f are the usual control characters
  - one to three octal digits give a byte value
  - a backslash before an end of line is a line continuation
  - a backslash before any other character yields that character

Hexadecimal strings may contain whitespace anywhere, and an odd
number of digits means a trailing zero was left off.
"""

import re
import codecs
import binascii

from ..convert import convert_load, convert_store


class PdfString(str):
    """ A PdfString is an encoded string.  It has a to_bytes
        method to get the actual string data out, and there
        are from_bytes and encode class methods to create such
        a string.
    """

    bytes_bom = codecs.BOM_UTF16_BE

    # Used by decode_literal; filled in on first use

    unescape_dict = None
    unescape_func = None

    @classmethod
    def init_unescapes(cls):
        """ Sets up the unescape attributes for decode_literal
        """
        unescape_pattern = r'\\([0-7]{1,3}|\r\n|.)'
        unescape_func = re.compile(unescape_pattern, re.DOTALL).split
        cls.unescape_func = unescape_func

        unescape_dict = dict(((chr(x), chr(x)) for x in range(0x100)))
        unescape_dict.update(zip('nrtbf', '\n\r\t\b\f'))
        unescape_dict['\r'] = ''
        unescape_dict['\n'] = ''
        unescape_dict['\r\n'] = ''
        for i in range(0o10):
            unescape_dict['%01o' % i] = chr(i)
        for i in range(0o100):
            unescape_dict['%02o' % i] = chr(i)
        for i in range(0o400):
            unescape_dict['%03o' % i] = chr(i)
        cls.unescape_dict = unescape_dict
        return unescape_func

    def decode_literal(self):
        """ Decode a PDF literal string, which is enclosed in parentheses ()
        """
        result = (self.unescape_func or self.init_unescapes())(self[1:-1])
        if len(result) == 1:
            return convert_store(result[0])
        unescape_dict = self.unescape_dict
        # Octal escapes above 0o377 wrap, per the reference
        result[1::2] = [unescape_dict[x] if x in unescape_dict
                        else chr(int(x, 8) & 0xFF)
                        for x in result[1::2]]
        return convert_store(''.join(result))

    def decode_hex(self):
        """ Decode a PDF hexadecimal-encoded string, which is enclosed
            in angle brackets <>.
        """
        hexstr = convert_store(''.join(self[1:-1].split()))
        if len(hexstr) % 2:
            hexstr += b'0'
        return binascii.unhexlify(hexstr)

    def to_bytes(self):
        """ Decode a PDF string to bytes.
        """
        if self.startswith('(') and self.endswith(')'):
            return self.decode_literal()

        elif self.startswith('<') and self.endswith('>'):
            return self.decode_hex()

        else:
            raise ValueError('Invalid PDF string "%s"' % repr(self))

    escape_splitter = None  # Calculated on first use

    @classmethod
    def init_escapes(cls):
        """ Initialize the escape_splitter for the from_bytes method
        """
        cls.escape_splitter = re.compile(br'(\(|\\|\))').split
        return cls.escape_splitter

    @classmethod
    def from_bytes(cls, raw, bytes_encoding='auto'):
        """ Encode a raw byte string into a PdfString that is suitable
            for inclusion in a PDF.

            bytes_encoding may be 'literal' or 'hex' to force a
            particular conversion method.  With 'auto', a literal
            string is used unless escaping would make it longer than
            the hex form.
        """
        force_hex = bytes_encoding == 'hex'
        if not force_hex:
            if bytes_encoding not in ('literal', 'auto'):
                raise ValueError('Invalid bytes_encoding value: %s'
                                 % bytes_encoding)
            splitlist = (cls.escape_splitter or cls.init_escapes())(raw)
            if bytes_encoding == 'auto' and len(splitlist) // 2 >= len(raw):
                force_hex = True

        if force_hex:
            # Uppercase hex digits, as most writers use
            fmt = '<%s>'
            result = binascii.hexlify(raw).upper()
        else:
            fmt = '(%s)'
            splitlist[1::2] = [(b'\\' + x) for x in splitlist[1::2]]
            result = b''.join(splitlist)

        return cls(fmt % convert_load(result))

    @classmethod
    def encode(cls, source):
        """ Encode bytes, or text.  Text that is not plain ASCII is
            stored as UTF-16BE with a byte order mark.
        """
        if isinstance(source, str):
            try:
                source = source.encode('ascii')
            except UnicodeError:
                return cls.from_bytes(cls.bytes_bom +
                                      source.encode('utf-16-be'), 'hex')
        return cls.from_bytes(source)
