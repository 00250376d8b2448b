import unittest

from ahpcore.judgments import JudgmentSet, split_composite_key


class TestJudgmentSet(unittest.TestCase):
    def test_lookup_falls_back_to_reverse(self) -> None:
        judgments = JudgmentSet()
        judgments.set("a", "b", 4.0, scope="s1")

        self.assertEqual(judgments.get("a", "b", scope="s1"), 4.0)
        self.assertIsNone(judgments.get("b", "a", scope="s1"))
        self.assertAlmostEqual(judgments.lookup("b", "a", scope="s1"), 0.25)
        self.assertIsNone(judgments.lookup("a", "b"))

    def test_scopes_are_independent(self) -> None:
        judgments = JudgmentSet([(("c1", "s1", "s2"), 3.0), ((None, "c1", "c2"), 2.0)])

        self.assertTrue(judgments.has_scope("c1"))
        self.assertFalse(judgments.has_scope("c2"))
        self.assertEqual(judgments.scoped(None), {("c1", "c2"): 2.0})
        self.assertEqual(len(judgments), 2)


class TestSplitCompositeKey(unittest.TestCase):
    def test_split_simple_ids(self) -> None:
        self.assertEqual(split_composite_key("c1-c2", ["c1", "c2"], ["c1", "c2"]), ["c1", "c2"])

    def test_split_hyphenated_uuid_ids(self) -> None:
        city_a = "3f1c2a9e-8d4b-4c55-9a71-0b6f0e5d2c11"
        city_b = "7a2e5b10-1c3d-4e6f-8a9b-c0d1e2f3a4b5"
        sub = "sub-port-1"

        parts = split_composite_key(f"{sub}-{city_a}-{city_b}", [sub], [city_a, city_b], [city_a, city_b])
        self.assertEqual(parts, [sub, city_a, city_b])

    def test_prefers_longest_matching_id(self) -> None:
        ids = ["a", "a-b", "c"]
        self.assertEqual(split_composite_key("a-b-c", ids, ids), ["a-b", "c"])

    def test_unknown_key(self) -> None:
        self.assertIsNone(split_composite_key("x-y", ["a"], ["b"]))
        self.assertIsNone(split_composite_key("a-b-extra", ["a"], ["b"]))
