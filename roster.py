import os.path
from typing import Dict, List, Tuple

from errors import RosterFormatError, RosterNotFound


class Roster(object):
    """
    A data-only class storing the student groups of an assignment

    The roster file is comma-separated text with one student per line:

    ```
    # identifier, group
    alice@example.com, 1
    bob, 1
    carol@example.com, 2
    ```

    Blank lines and lines starting with `#` are ignored. Identifiers may be
    GitHub logins or email addresses; they are kept exactly as written (after
    trimming) and duplicates are preserved.

    Attributes:
        path (str): The roster file this roster was read from.
        groups (Dict[int, List[str]]): A dictionary mapping group number to
            its students, in the order they appear in the file.
    """

    def __init__(self, path: str, verbosity: bool = False):
        if not os.path.isfile(path):
            raise RosterNotFound(f"Roster file {path} not found.")

        self.verbose: bool = verbosity
        "Flag to enable verbose output"

        self.path: str = path
        "The roster file this roster was read from."

        self.groups: Dict[int, List[str]] = {}
        "A dictionary mapping group number to its students."

        # utf-8-sig drops the byte order mark spreadsheet exports start with
        try:
            with open(path, "r", encoding="utf-8-sig") as f:
                for lineno, line in enumerate(f, start=1):
                    line = line.rstrip("\r\n").strip()
                    if not line or line.startswith("#"):
                        continue
                    student, group = self.parse_line(line, lineno)
                    self.add_mapping(student, group)
        except UnicodeDecodeError as e:
            raise RosterFormatError(
                f"Roster file {path} is not UTF-8 text: {e.reason} at byte "
                f"{e.start}")
        except OSError as e:
            raise RosterNotFound(
                f"Cannot read roster file {path}: {e.strerror or e}")

        if self.verbose:
            print(f"Read {len(self.students)} students in "
                  f"{len(self.groups)} groups from {path}")

    def parse_line(self, line: str, lineno: int) -> Tuple[str, int]:
        """Splits one roster line into (identifier, group number)

        :param line: A trimmed, non-comment line
        :param lineno: The line number, for error messages
        :return: The student identifier and its group number
        """
        fields = line.split(",", 1)
        if len(fields) != 2:
            raise RosterFormatError(
                f"{self.path}:{lineno}: expected 'identifier, group' "
                f"but got '{line}'")

        student = fields[0].strip()
        group = fields[1].strip()
        if not student:
            raise RosterFormatError(
                f"{self.path}:{lineno}: missing student identifier")
        try:
            number = int(group)
        except ValueError:
            number = 0
        if number < 1:
            raise RosterFormatError(
                f"{self.path}:{lineno}: group number must be a positive "
                f"integer, got '{group}'")
        return student, number

    def add_mapping(self, student: str, group: int) -> None:
        """Appends a student to a group, creating the group if needed

        :param student: Student identifier
        :param group: Group number
        """
        if group in self.groups:
            self.groups[group].append(student)
        else:
            self.groups[group] = [student]

    def lookupGroup(self, group: int) -> List[str]:
        """Looks up the students assigned to a group

        :param group: The group number
        :return: The students of the group, in roster order
        """
        return self.groups[group]

    @property
    def group_numbers(self) -> List[int]:
        """Returns the group numbers in ascending order"""
        return sorted(self.groups.keys())

    @property
    def students(self) -> List[str]:
        return [s for g in self.group_numbers for s in self.groups[g]]

    def pretty_print(self) -> None:
        """Prints out a human-readable representation of the roster"""
        print(f"Roster {self.path}:")
        for group in self.group_numbers:
            print(f"  group {group}: {', '.join(self.groups[group])}")
