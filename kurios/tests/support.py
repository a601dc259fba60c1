"""
Shared fixtures for the KuriOS test suite.
"""

from kurios.environment.codec import EnvironmentCodec, LoadedEnvironment
from kurios.filesystem.vfs import VirtualFileSystem


SAMPLE_ENVIRONMENT = """
{
  "vars": {
    "motd": "hello there"
  },
  "perms": {
    "admin": ["*"],
    "moderator": ["cd", "ls", "cat", "lock", "unlock", "su"],
    "everyone": ["help", "pwd", "cd", "ls", "cat", "su"]
  },
  "struct": {
    "docs": {
      "type": "folder",
      "children": {
        "notes": {
          "type": "folder",
          "children": {
            "todo": {"type": "file", "data": "water the plants"}
          }
        },
        "readme": {"type": "file", "data": "hello"}
      }
    },
    "event": {
      "type": "folder",
      "availableBetween": ["2999-01-01 00:00:00", "2999-01-02 00:00:00"],
      "children": {
        "ticket": {"type": "file", "data": "admit one"}
      }
    },
    "vault": {
      "type": "folder",
      "locked": true,
      "key": "k1",
      "children": {
        "secret": {"type": "file", "data": "42"}
      }
    }
  }
}
"""


def load_sample() -> LoadedEnvironment:
    return EnvironmentCodec().load(SAMPLE_ENVIRONMENT)


def sample_vfs() -> VirtualFileSystem:
    return VirtualFileSystem(load_sample().root)
