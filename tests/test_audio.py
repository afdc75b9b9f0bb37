"""
Tests for audio notifications.
"""

from unittest import TestCase, main

from puzzle2048.config import AudioConfiguration
from puzzle2048.services.audio import AudioCue, AudioNotifier


class TestAudioNotifier(TestCase):
    def setUp(self):
        self.played = []
        self.audio = AudioNotifier(
            player=lambda cue, volume: self.played.append((cue, volume)),
            configuration=AudioConfiguration(muted=False, bgm_volume=0.5, sfx_volume=0.7),
        )

    def test_nothing_before_init(self):
        self.audio.play(AudioCue.MERGE)
        self.assertEqual(self.played, [])

    def test_play_uses_channel_volume(self):
        self.audio.init()
        self.audio.play(AudioCue.MERGE)
        self.audio.play(AudioCue.BACKGROUND)
        self.assertEqual(self.played, [(AudioCue.MERGE, 0.7), (AudioCue.BACKGROUND, 0.5)])

    def test_muted_by_default(self):
        audio = AudioNotifier(player=lambda cue, volume: self.played.append(cue))
        audio.init()
        audio.play(AudioCue.GAME_OVER)
        self.assertTrue(audio.is_muted)
        self.assertEqual(self.played, [])

    def test_toggle_mute_restarts_background(self):
        self.audio.init()
        self.assertTrue(self.audio.toggle_mute())
        self.audio.play(AudioCue.MOVE)
        self.assertFalse(self.audio.toggle_mute())
        self.assertEqual(self.played, [(AudioCue.BACKGROUND, 0.5)])

    def test_volumes_are_clamped(self):
        self.audio.set_bgm_volume(3.0)
        self.audio.set_sfx_volume(-1.0)
        self.assertEqual(self.audio.bgm_volume, 1.0)
        self.assertEqual(self.audio.sfx_volume, 0.0)

    def test_player_errors_are_swallowed(self):
        def broken(cue, volume):
            raise RuntimeError("no device")

        audio = AudioNotifier(player=broken, configuration=AudioConfiguration(muted=False))
        audio.init()
        with self.assertLogs("puzzle2048.services.audio", level="ERROR"):
            audio.play(AudioCue.ACHIEVEMENT)

    def test_dispose(self):
        self.audio.init()
        self.audio.dispose()
        self.assertFalse(self.audio.is_initialized)
        self.audio.play(AudioCue.MERGE)
        self.assertEqual(self.played, [])


if __name__ == "__main__":
    main()
