"""Custom logging levels used by the harness output.

TEST marks the start of a probe, PASS and FAIL carry verdicts. They sit
between the standard levels so that filtering by INFO keeps all of them.
"""

import logging

TEST = 21
PASS = 25
FAIL = 35

logging.addLevelName(TEST, "TEST")
logging.addLevelName(PASS, "PASS")
logging.addLevelName(FAIL, "FAIL")
