#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from unittest import mock
from mchip.audio.a_null import Audio


class TestAudio(unittest.TestCase):
    def test_audio_null_state(self):
        audio = Audio()
        self.assertFalse(audio.buzzer_enabled)
        audio.enable_buzzer(True)
        self.assertTrue(audio.buzzer_enabled)
        audio.shutdown()
        self.assertFalse(audio.buzzer_enabled)

    def test_audio_curses_beeps_on_start(self):
        from mchip.audio.a_curses import Audio as CursesAudio  # pylint: disable=import-outside-toplevel

        with mock.patch("mchip.audio.a_curses.curses.beep") as beep:
            audio = CursesAudio()

            # Repeated requests while the sound timer runs only beep once
            for _ in range(3):
                audio.enable_buzzer(True)

            audio.enable_buzzer(False)
            audio.shutdown()

        self.assertEqual(1, beep.call_count)


if __name__ == "__main__":
    unittest.main()
