"""
# pngchunk: the chunks of a PNG file, for humans.

A PNG file is a signature followed by an ordered list of chunks, each one
made of a length, a type, some data and a CRC. This package reads such a
list, allows to add, find and remove chunks of any type (also the private
ones nobody else knows about) and writes it back.

Two basic main operations are defined for the file format and its sub components:

 1. unpack()/parse(): reading the binary data and build a high-level
    representation of that; a failure aborts the whole operation, nothing
    partial is returned.

 2. pack(): encode the high-level representation into binary data.

For data that is not modified between the two operations, pack() returns
exactly the bytes given to parse().
"""
