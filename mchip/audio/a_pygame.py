#!/usr/bin/env python3

"""
PyGame Audio Plugin

Plays the buzzer within PyGame / SDL.

The emulated buzzer simply has an 'on' or 'off' status, so a single cycle of a
square wave is built at startup and looped for as long as the buzzer is on.
The waveform is an 8-bit unsigned buffer, so silence is 0x80 and the wave
swings between 0x00 and 0xFF.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .a_null import Audio as AudioBase

PLAYBACK_FREQUENCY = 44100
DEFAULT_TONE = 440.0
DEFAULT_VOLUME = 0.1


class Audio(AudioBase):
    def __init__(self, tone=DEFAULT_TONE):
        pygame.mixer.pre_init(PLAYBACK_FREQUENCY, size=8, channels=1, buffer=512, allowedchanges=0)
        pygame.mixer.init()
        self.sound = pygame.mixer.Sound(buffer=self.build_waveform(tone))
        self.sound.set_volume(DEFAULT_VOLUME)
        super().__init__()

    @staticmethod
    def build_waveform(tone):
        # One full cycle of a square wave, stretched to fit the playback rate
        period = max(2, int(round(PLAYBACK_FREQUENCY / tone)))
        half_period = period // 2
        return bytes(0xFF if sample < half_period else 0x00 for sample in range(period))

    def buzzer_changed(self, enabled):
        # Play or stop buffer playback.  Looping (-1) keeps the tone going until stopped.
        if enabled:
            self.sound.play(-1)
        else:
            self.sound.stop()

    def shutdown(self):
        super().shutdown()
        pygame.mixer.quit()
