"""appscrub - remove macOS applications together with their leftovers.

Locates the auxiliary files an application scatters across the Library
folders, moves the selected set to the Trash (escalating privileges
where needed) and keeps a history so deletions can be restored.
"""

__version__ = "0.3.0"
