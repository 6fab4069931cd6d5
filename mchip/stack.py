#!/usr/bin/env python3

"""
Stack Emulator

The call stack lives outside system RAM, because there is no specified
location for it and no instruction exposes it to the running program.  This
means we can simply wrap a list to fully (and quickly) emulate it.

The number of items held is the stack pointer: 0 when empty, and equal to the
stack size when every level is in use.  Pushing onto a full stack or popping
an empty one raises a StackError, so callers that want the interpreter's
silent no-op behaviour must check 'is_full' / 'is_empty' first.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class StackError(Exception):
    pass


class Stack:
    def __init__(self, size):
        self.items = []
        self.size = size

    @property
    def pointer(self):
        # Index of the next free slot
        return len(self.items)

    def is_full(self):
        return len(self.items) >= self.size

    def is_empty(self):
        return not self.items

    def push(self, item):
        # Fetching the stack size with 'len' should be immediate, so no slow loop
        if len(self.items) >= self.size:
            raise StackError("Stack overflow")

        self.items.append(item)

    def pop(self):
        try:
            return self.items.pop()
        except IndexError:
            raise StackError("Stack underflow") from None

    def clear(self):
        self.items.clear()

    def get_items(self):
        # For debugging
        return self.items
