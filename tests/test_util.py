# -*- coding: utf-8 -*-
import os
import shutil
import unittest

from tasknest import util
from tasknest.util import matcher
from tasknest.util.filespec import FileList


class TestUtil(unittest.TestCase):

    def setUp(self):
        self.workdir = "/tmp/tasknest_testutil"
        if not os.path.isdir(self.workdir):
            os.mkdir(self.workdir)


    def tearDown(self):
        if os.path.isdir(self.workdir):
            shutil.rmtree(self.workdir)


    def touch(self, *names):
        for name in names:
            path = os.path.join(self.workdir, name)
            util.mkdirp(os.path.dirname(path))
            open(path, 'w').close()


    def test_sugar_list(self):
        self.assertEqual(util.sugar_list("a"), ["a"])
        self.assertEqual(util.sugar_list(["a", "b"]), ["a", "b"])
        self.assertEqual(util.sugar_list(5), [5])

    def test_mkdirp(self):
        d = os.path.join(self.workdir, "a", "b")
        util.mkdirp(d)
        util.mkdirp(d)
        self.assertTrue(os.path.isdir(d))

    def test_sh(self):
        out, err = util.sh(["echo", "hello"])
        self.assertEqual(out, "hello\n")
        with self.assertRaises(util.ShellException):
            util.sh("exit 3", shell=True)

    def test_expand_path(self):
        os.environ["TASKNEST_TEST_DIR"] = "sub"
        try:
            self.assertEqual(util.expand_path("$TASKNEST_TEST_DIR/x", "/base"),
                             "/base/sub/x")
        finally:
            del os.environ["TASKNEST_TEST_DIR"]
        self.assertEqual(util.expand_path("/abs/y", "/base"), "/abs/y")

    def test_closest_names(self):
        known = ["build", "clean", "db:migrate", "test"]
        self.assertEqual(matcher.closest_names("biuld", known), ["build"])
        self.assertEqual(matcher.closest_names("db:migrat", known), ["db:migrate"])
        self.assertEqual(matcher.closest_names("zzzzzz", known, max_distance=2), [])

    def test_distance(self):
        self.assertEqual(matcher.distance("abc", "abc"), 0)
        self.assertEqual(matcher.distance("ab", "ba"), 2)


    def test_filelist(self):
        self.touch("a.py", "pkg/b.py", "pkg/test_b.py", "README")
        files = FileList(self.workdir).include("**/*.py").exclude("**/test_*.py")
        self.assertEqual(files.files, ["a.py", os.path.join("pkg", "b.py")])
        files.include("pkg/test_b.py", force=True).exclude("pkg/*.py")
        self.assertEqual(list(files), ["a.py", os.path.join("pkg", "test_b.py")])
        self.assertEqual(len(files), 2)

    def test_filelist_directories(self):
        self.touch("docs/index.txt")
        files = FileList(self.workdir).include("*")
        self.assertIn("docs" + os.sep, files.files)


if __name__ == "__main__":
    unittest.main()
