import os
import sys
import unittest

# Make the package importable when running from a source checkout
tests_dir = os.path.dirname(os.path.abspath(__file__))
root_dir = os.path.dirname(tests_dir)
for path in (root_dir, tests_dir):
    if path not in sys.path:
        sys.path.insert(0, path)


def run_all_tests():
    print("========================================")
    print("Running Shader Graph Tests")
    print("========================================")

    loader = unittest.TestLoader()
    suite = loader.discover(tests_dir, pattern='test_*.py', top_level_dir=tests_dir)

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)

    if not result.wasSuccessful():
        sys.exit(1)

    print("All tests passed!")


if __name__ == "__main__":
    run_all_tests()
