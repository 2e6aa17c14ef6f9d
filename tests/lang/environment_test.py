import unittest

from grass.lang.environment import Environment
from grass.lang.error import IndexRangeError
from grass.lang.values import Closure


class EnvironmentTestCase(unittest.TestCase):

    def test_get(self):
        env = Environment(["a", "b", "c"])
        cases = {1: "c", 2: "b", 3: "a"}
        for idx, expected in cases.items():
            self.assertEqual(expected, env.get(idx), idx)
        self.assertEqual("c", env.top)
        self.assertEqual(3, len(env))
        self.assertEqual(["a", "b", "c"], list(env))

    def test_out_of_range(self):
        env = Environment(["a", "b"])
        for idx in [0, 3, 10, -1]:
            self.assertRaises(IndexRangeError, env.get, idx)
        self.assertRaises(IndexRangeError, lambda: Environment().top)

    def test_push_is_persistent(self):
        base = Environment(["a"])
        left = base.push("b")
        right = base.push("c").push("d")

        self.assertEqual(["a"], list(base))
        self.assertEqual(["a", "b"], list(left))
        self.assertEqual(["a", "c", "d"], list(right))
        self.assertEqual("a", right.get(3))

    def test_equality(self):
        self.assertEqual(Environment(["a", "b"]), Environment(["a"]).push("b"))
        self.assertNotEqual(Environment(["a", "b"]), Environment(["b", "a"]))
        self.assertEqual(Environment(), Environment([]))

    def test_hash(self):
        self.assertEqual(hash(Environment(["a", "b"])), hash(Environment(["a"]).push("b")))
        closures = {Closure((), Environment(["a"])), Closure((), Environment(["a"]))}
        self.assertEqual(1, len(closures))


if __name__ == '__main__':
    unittest.main()
