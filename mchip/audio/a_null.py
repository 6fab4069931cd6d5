#!/usr/bin/env python3

"""
Null Audio Plugin

Serves as a base class for other Audio plugins.  Can be used on its own if no
sound is required.

The timer unit calls 'enable_buzzer' on every 60Hz tick while the sound timer
is running, not just when it starts and stops, so subclasses only need to act
when the requested state actually changes.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class Audio:
    def __init__(self):
        # Buzzer should be disabled (not playing sounds) by default
        self.buzzer_enabled = False

    def enable_buzzer(self, enabled):
        # The buzzer should play sounds when the sound timer is >0
        if enabled != self.buzzer_enabled:
            self.buzzer_enabled = enabled
            self.buzzer_changed(enabled)

    def buzzer_changed(self, enabled):
        pass

    def shutdown(self):
        self.enable_buzzer(False)
