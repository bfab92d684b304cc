"""
Repository helpers: locating CODEOWNERS files and listing tracked files.
"""

from file_codeowners.repo.git import git_ls_files, git_toplevel
from file_codeowners.repo.locate import find_codeowners_in_directory, find_nearest_codeowners

__all__ = [
    "find_codeowners_in_directory",
    "find_nearest_codeowners",
    "git_ls_files",
    "git_toplevel",
]
