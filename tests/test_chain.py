# -*- coding: utf-8 -*-
import unittest

import tasknest
from tasknest.chain import InvocationChain, CircularDependencyError
from tasknest.namespace import Namespace, GLOBAL_NAME

from tests.util import add


class TestInvocationChain(unittest.TestCase):

    def setUp(self):
        self.root = Namespace(GLOBAL_NAME)
        self.x = add(self.root, "X")
        self.y = add(self.root, "Y")
        self.chain = InvocationChain()

    def test_append_and_contains(self):
        self.assertFalse(self.chain.contains(self.x))
        self.chain.append(self.x)
        self.chain.append(self.y)
        self.assertTrue(self.chain.contains(self.x))
        self.assertIn(self.y, self.chain)
        self.assertEqual(len(self.chain), 2)
        self.assertEqual(list(self.chain), [self.x, self.y])
        self.assertEqual(str(self.chain), "global:X => global:Y")

    def test_duplicate_is_circular(self):
        self.chain.append(self.x)
        self.chain.append(self.y)
        with self.assertRaises(CircularDependencyError) as cm:
            self.chain.append(self.x)
        err = cm.exception
        self.assertEqual(err.chain, [self.x, self.y])
        self.assertIs(err.task, self.x)
        self.assertEqual(str(err),
                         "Circular dependency detected: global:X => global:Y => global:X")
        self.assertEqual(len(self.chain), 2, "a failed append leaves the chain alone")

    def test_identity_not_name(self):
        other_root = Namespace(GLOBAL_NAME)
        same_name = add(other_root, "X")
        self.chain.append(self.x)
        self.assertFalse(self.chain.contains(same_name))
        self.chain.append(same_name)
        self.assertEqual(len(self.chain), 2)

    def test_remove(self):
        self.chain.append(self.x)
        self.chain.append(self.y)
        self.chain.remove(self.y)
        self.assertNotIn(self.y, self.chain)
        # y can go on the active path again once it left
        self.chain.append(self.y)
        self.chain.remove(tasknest.Task("unknown"))
        self.assertEqual(list(self.chain), [self.x, self.y])

    def test_independent_chains(self):
        other = InvocationChain()
        self.chain.append(self.x)
        other.append(self.x)
        self.assertIn(self.x, other)


if __name__ == "__main__":
    unittest.main()
