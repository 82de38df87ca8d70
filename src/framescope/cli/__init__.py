"""
Command-line interface for framescope.

The CLI is built using the Click framework and provides:

- Validating JSON maps (project files)
- Decoding captured device output in any operation mode

Examples
--------
Checking a project file:
```bash
$ framescope validate project.json
```

Decoding quick plot data from a device piped on stdin:
```bash
$ cat /dev/ttyUSB0 | framescope decode -m quickplot
```

CLI Tree
--------

```
$ framescope --tree
cli
└── decode
└── validate
```
"""

from .base import cli, tree_option
from .decode import decode

cli.add_command(decode)

__all__ = ["cli", "tree_option"]
