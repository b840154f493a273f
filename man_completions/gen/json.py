"""A JSON dump of everything that was parsed.

The output can be read back with man_completions.deser.
"""

import json


def generate(cmd):
    """Generate JSON representing the parsed command, returning (file name, text)"""
    return "%s.json" % cmd.name, json.dumps(cmd.to_dict(), indent=2) + "\n"
