"""
rgssad: decrypt and extract RPG Maker XP/VX/VX Ace archives

Supported containers (signature "RGSSAD\\0" plus one revision byte):

- Revision 1: RPG Maker XP (.rgssad) and RPG Maker VX (.rgss2a)
- Revision 3: RPG Maker VX Ace (.rgss3a)

Every entry carries its own 32-bit key; payloads are XORed with a rolling
little-endian keystream advanced by ``key * 7 + 3``. Entry names are treated
as untrusted: extraction never writes outside the destination directory.
"""

__version__ = "0.1"

__all__ = [
    "constants",
    "errors",
    "probe",
    "cipher",
    "entries",
    "reader",
]

# Programmatic API: rgssad.reader.ArchiveReader / open_archive, and the CLI
# functions in rgssad.cli (cmd_list/cmd_extract) which take normal parameters.
