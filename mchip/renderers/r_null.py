#!/usr/bin/env python3

"""
Null Renderer Plugin

This serves as a base class for other rendering plugins.

This module can be used on its own as a Renderer plugin if you only want to see
debug output.  Without a renderer, performance data will also not be shown.

Renderers pull from the framebuffer rather than having pixels pushed at them,
so the CPU can draw at full speed while the screen is only redrawn at the
host's frame rate.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class RendererError(Exception):
    pass


class Renderer:
    def __init__(self, scale=None, **kwargs):  # pylint: disable=unused-argument
        self.scale = 1 if scale is None else scale
        self.set_resolution(0, 0)

    def set_resolution(self, width, height):
        self.width = width
        self.height = height

    def draw(self, framebuffer):
        # Copy the framebuffer to the display, but only if something was drawn since last time
        if not framebuffer.changed:
            return

        vid_width, vid_height = framebuffer.get_vid_size()

        if (vid_width, vid_height) != (self.width, self.height):
            self.set_resolution(vid_width, vid_height)

        cells = framebuffer.get_cells()

        for y in range(vid_height):
            row_start = y * vid_width

            for x in range(vid_width):
                self.set_pixel(x, y, cells[row_start + x])

        framebuffer.changed = False
        self.refresh_display(True)

    def set_pixel(self, x, y, colour):  # pylint: disable=unused-argument
        pass

    def refresh_display(self, content_changed=False):
        pass

    def set_title(self, title):
        pass

    def shutdown(self):
        pass
