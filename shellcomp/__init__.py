"""shellcomp - shell completion scripts for command-line applications.

Snapshots the commands and flags registered by an application's plugins,
then renders bash, zsh and fish completion scripts into a cache directory.
"""

VERSION = "0.3.0"
