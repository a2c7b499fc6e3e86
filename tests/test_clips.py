import sys
import os
import unittest

# Add the project root to sys.path
script_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.dirname(script_dir)
sys.path.insert(0, project_root)

from cc_rig_import.animation.clips import (
    ROOT_LOCK_FLAGS,
    normalize_clips,
    select_controller_clips,
)
from cc_rig_import.data.intermediate import AnimationClipDescriptor


def locked(name, **flags):
    clip = AnimationClipDescriptor(name=name)
    for flag in ROOT_LOCK_FLAGS:
        setattr(clip, flag, True)
    for flag, value in flags.items():
        setattr(clip, flag, value)
    return clip


class TestNormalizeClips(unittest.TestCase):
    def test_root_locks_forced_on(self):
        clip = AnimationClipDescriptor(name="Walk", keep_original_orientation=True)
        clips, changed = normalize_clips([clip])
        self.assertTrue(changed)
        self.assertIs(clips[0], clip)
        for flag in ROOT_LOCK_FLAGS:
            self.assertTrue(getattr(clip, flag), flag)
        self.assertFalse(clip.lock_root_position_xz)
        self.assertFalse(clip.loop_time)

    def test_loop_clip(self):
        clip = locked("Run_Loop")
        _, changed = normalize_clips([clip])
        self.assertTrue(changed)
        self.assertTrue(clip.loop_time)

    def test_idle_clip(self):
        clip = locked("Idle")
        _, changed = normalize_clips([clip])
        self.assertTrue(changed)
        self.assertTrue(clip.lock_root_position_xz)
        self.assertFalse(clip.loop_time)

    def test_already_normalized(self):
        clip = locked("Walk")
        _, changed = normalize_clips([clip])
        self.assertFalse(changed)

    def test_flags_are_never_turned_off(self):
        clip = locked("Walk", loop_time=True, lock_root_position_xz=True)
        _, changed = normalize_clips([clip])
        self.assertFalse(changed)
        self.assertTrue(clip.loop_time)
        self.assertTrue(clip.lock_root_position_xz)

    def test_idempotent(self):
        clips = [AnimationClipDescriptor(name="Idle_Loop"),
                 AnimationClipDescriptor(name="Jump"),
                 locked("idle_breathe")]
        _, first = normalize_clips(clips)
        snapshot = [c.flags() for c in clips]
        _, second = normalize_clips(clips)
        self.assertTrue(first)
        self.assertFalse(second)
        self.assertEqual([c.flags() for c in clips], snapshot)

    def test_no_clips(self):
        self.assertEqual(normalize_clips([]), ([], False))
        self.assertEqual(normalize_clips(None), ([], False))


class TestControllerClips(unittest.TestCase):
    def test_preview_and_tpose_excluded(self):
        clips = [AnimationClipDescriptor(name=n) for n in
                 ("Idle", "__preview__Take 001", "T-Pose", "Walk_Loop")]
        self.assertEqual([c.name for c in select_controller_clips(clips)],
                         ["Idle", "Walk_Loop"])


if __name__ == "__main__":
    unittest.main()
