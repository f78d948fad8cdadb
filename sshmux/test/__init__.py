import os
import unittest


def suite():
    here = os.path.dirname(os.path.abspath(__file__))
    top = os.path.dirname(os.path.dirname(here))
    return unittest.TestLoader().discover(here, top_level_dir=top)
