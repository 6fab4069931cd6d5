#!/usr/bin/env python3

"""
PyGame Renderer Plugin

Draws the framebuffer onto an SDL window surface via PyGame.  Note that the
surface is allocated at the size of the framebuffer, and then the contents are
stretched (in the correct aspect ratio using 'Nearest Neighbour' translation)
to fit the window itself.  This means we don't have to draw the same pixel
multiple times.

Unset pixels are drawn in the background colour, and set pixels in the
foreground colour.  Either can be overridden with a user-defined palette.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .r_null import RendererError, Renderer as RendererBase
from ..constants import APP_NAME


def parse_palette(pygame_palette, colour_map):
    # Override some (or all) of the colours with a comma-separated list of 6-digit hex values
    colour_map = list(colour_map)
    pygame_palette_split = pygame_palette.split(",")

    if len(pygame_palette_split) > len(colour_map):
        raise RendererError("Too many palette colours defined.")

    for pygame_colour_num, pygame_colour in enumerate(pygame_palette_split):
        if len(pygame_colour) != 6:
            raise RendererError("Palette colours must all be 6 hex digits long.")

        try:
            colour_map[pygame_colour_num] = int(pygame_colour, 16)
        except ValueError:
            raise RendererError("Invalid palette colour defined.") from None

    return colour_map


class Renderer(RendererBase):
    def __init__(self, scale=None, pygame_palette=None, smoothing=0, **kwargs):
        if scale is None:
            scale = 512  # Default window width if not supplied, or set to default

        pygame.display.init()
        self.set_title(APP_NAME)
        self.rgb_buffer = None
        self.scaled_size = (scale, scale // 2)
        self.display_surface = pygame.display.set_mode(self.scaled_size)
        self.smoothing = smoothing

        # Background, then foreground.  Looked up instantly by pixel value.
        colour_map = [0x222222, 0xDDDDDD]

        if pygame_palette is not None:
            colour_map = parse_palette(pygame_palette, colour_map)

        # Split compound RGB values for faster byte-based lookup later
        self.rgb_map = [bytes((i >> 16, (i >> 8) & 0xFF, i & 0xFF)) for i in colour_map]

        super().__init__(scale)

    def set_resolution(self, width, height):
        total_pixels = width * height
        self.rgb_buffer = memoryview(bytearray(self.rgb_map[0] * total_pixels))  # 24-bit, background filled

        # Call superclass method so display size is known on the next refresh
        super().set_resolution(width, height)

    def set_pixel(self, x, y, colour):
        # Update RGB buffer in-place to minimise allocations and PyGame calls
        rgb_location = (y * self.width + x) * 3
        self.rgb_buffer[rgb_location:rgb_location + 3] = self.rgb_map[colour]

    def refresh_display(self, content_changed=False):
        if content_changed and self.width and self.height:
            # Blit the bytearray straight to the surface.  This is much faster than very frequent PixelArray updates
            render_surface = pygame.image.frombuffer(self.rgb_buffer, (self.width, self.height), "RGB")

            # Apply Scale2x rendering passes if requested
            for _ in range(self.smoothing):
                render_surface = pygame.transform.scale2x(render_surface)

            scaled_win = pygame.transform.scale(render_surface, self.scaled_size)
            self.display_surface.blit(scaled_win, (0, 0))
            pygame.display.flip()

    def set_title(self, title):
        pygame.display.set_caption(title)

    def shutdown(self):
        # PyGame currently segfaults if display.quit is called via __del__
        pygame.display.quit()
        super().shutdown()
