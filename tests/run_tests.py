import os
import sys
import unittest

# Add the parent directory to the Python path so we can import the chuck package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

if __name__ == '__main__':
    suite = unittest.TestLoader().discover(
        os.path.dirname(__file__), top_level_dir=os.path.join(os.path.dirname(__file__), '..')
    )
    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)
    sys.exit(not result.wasSuccessful())
