import datetime
import os
import os.path
import sys
from typing import Callable, Iterator, List, NamedTuple, Optional

from config import Config
from errors import ClassHubError, UserCancelled
from hosting import GitHubHosting
from roster import Roster
from utils import academic_year, matches_prefix, repo_name
from vcs import Git


class StudentCheck(NamedTuple):
    """The result of looking up one roster identifier on GitHub"""
    identifier: str
    login: Optional[str]
    error: Optional[str] = None

    @property
    def exists(self) -> bool:
        return self.login is not None


class GroupPlan(NamedTuple):
    group: int
    repo: str
    students: List[StudentCheck]


class AssignmentPlan(object):
    """What `ClassHub.create_assignment` is about to do

    Building a plan only reads from GitHub; nothing is created until the plan
    is applied.
    """

    def __init__(self, classroom: str, assignment: str, year: str,
                 template: Optional[str] = None):
        self.classroom = classroom
        self.assignment = assignment
        self.year = year
        self.template = template
        self.groups: List[GroupPlan] = []

    @property
    def missing_students(self) -> List[StudentCheck]:
        return [s for g in self.groups for s in g.students if not s.exists]

    def pretty_print(self) -> None:
        """Prints out the repositories to create and their students"""
        print(f"Assignment '{self.assignment}' in {self.classroom} "
              f"(academic year {self.year})")
        if self.template:
            print(f"template: {self.template}")
        for g in self.groups:
            print(f"  {g.repo}")
            for s in g.students:
                if s.exists:
                    status = "ok"
                    login = "" if s.login == s.identifier else f" -> {s.login}"
                elif s.error:
                    status = "error"
                    login = f" ({s.error})"
                else:
                    status = "not found"
                    login = ""
                print(f"    [{status}] {s.identifier}{login}")


class CreationResult(object):
    def __init__(self):
        self.created: List[str] = []
        "Repositories created by this run."

        self.existing: List[str] = []
        "Repositories skipped because they already exist."

        self.invited: List[str] = []
        "`repo:login` pairs invited as collaborators."

        self.failed: List[str] = []
        "Messages for every repository or invitation that failed."

    def pretty_print(self) -> None:
        print(f"{len(self.created)} created, {len(self.existing)} already "
              f"existing, {len(self.invited)} invitations, "
              f"{len(self.failed)} failures.")


class ClassHub(object):
    """The main class for ClassHub

    Contains the assignment operations; GitHub and git are passed in so the
    operations can run against any implementation of them.
    """

    @staticmethod
    def plan_assignment(hosting: GitHubHosting, classroom: str,
                        assignment: str, roster: Roster,
                        template: Optional[str] = None,
                        today: Optional[datetime.date] = None
                        ) -> AssignmentPlan:
        """Looks up every student and names every repository of an assignment

        :param hosting: GitHub client
        :param classroom: Organization the repositories belong to
        :param assignment: Name of the assignment
        :param roster: The student groups
        :param template: Optional `owner/name` of a template repository
        :param today: Date used for the academic year; defaults to today
        :return: The plan, ready to be shown and applied
        """
        year = academic_year(today)
        plan = AssignmentPlan(classroom, assignment, year, template)
        for group in roster.group_numbers:
            students = []
            for student in roster.lookupGroup(group):
                try:
                    students.append(
                        StudentCheck(student, hosting.find_user(student)))
                except ClassHubError as e:
                    print(f"WARNING: {e}", file=sys.stderr)
                    students.append(StudentCheck(student, None, str(e)))
            plan.groups.append(
                GroupPlan(group, repo_name(year, assignment, group), students))
        return plan

    @staticmethod
    def create_assignment(hosting: GitHubHosting, plan: AssignmentPlan,
                          confirm: Callable[[str], bool]) -> CreationResult:
        """Creates the repositories of a plan and invites their students

        Repositories that already exist are skipped, students that do not
        exist on GitHub are skipped with a warning, and a failure in one group
        does not stop the others.

        :param hosting: GitHub client
        :param plan: A plan from `plan_assignment`
        :param confirm: Asked once before anything is created
        :return: What was created, skipped and what failed
        """
        if not confirm(f"Create {len(plan.groups)} repositories in "
                       f"{plan.classroom}?"):
            raise UserCancelled("No repositories were created.")

        result = CreationResult()
        for g in plan.groups:
            try:
                if hosting.repo_exists(plan.classroom, g.repo):
                    print(f"Repository {g.repo} already exists. Skipping.")
                    result.existing.append(g.repo)
                    continue
                print(f"creating repository {g.repo}")
                hosting.create_repo(plan.classroom, g.repo, plan.template)
                result.created.append(g.repo)
            except ClassHubError as e:
                print(f"ERROR: {e}", file=sys.stderr)
                result.failed.append(str(e))
                continue

            # add write privs for each student login
            for s in g.students:
                if not s.exists:
                    print(f"WARNING: {s.identifier} is not a GitHub user; "
                          f"not added to {g.repo}.", file=sys.stderr)
                    continue
                print(f"adding {s.login} as collaborator to {g.repo} "
                      f"repository.")
                try:
                    hosting.add_collaborator(plan.classroom, g.repo, s.login)
                    result.invited.append(f"{g.repo}:{s.login}")
                except ClassHubError as e:
                    print(f"ERROR: {e}", file=sys.stderr)
                    result.failed.append(str(e))
        return result

    @staticmethod
    def list_assignments(hosting: GitHubHosting, classroom: str,
                         prefix: Optional[str] = None) -> Iterator[str]:
        """Yields the repositories of a classroom matching an assignment prefix

        :param hosting: GitHub client
        :param classroom: Organization to search
        :param prefix: Assignment name prefix; all repositories if empty
        """
        for name in hosting.list_repos(classroom):
            if matches_prefix(name, prefix):
                yield name

    @staticmethod
    def get_assignment(hosting: GitHubHosting, git: Git, config: Config,
                       classroom: str, prefix: str, directory: str,
                       confirm: Callable[[str], bool]) -> List[str]:
        """Clones or pulls every repository of an assignment

        A directory named after the repository means it was cloned before and
        only needs a pull. A failing clone or pull is reported and the
        remaining repositories are still processed.

        :param hosting: GitHub client
        :param git: git runner
        :param config: Settings providing the clone URLs
        :param classroom: Organization owning the repositories
        :param prefix: Assignment name prefix
        :param directory: Where the clones live
        :param confirm: Asked once before anything is cloned
        :return: The repositories that failed
        """
        repos = list(ClassHub.list_assignments(hosting, classroom, prefix))
        if not repos:
            print(f"No repositories in {classroom} match '{prefix}'.")
            return []

        print(f"Repositories matching '{prefix}' in {classroom}:")
        for repo in repos:
            print(f"  {repo}")
        if not confirm(f"Fetch {len(repos)} repositories into {directory}?"):
            raise UserCancelled("Nothing was fetched.")

        os.makedirs(directory, exist_ok=True)

        failed = []
        for repo in repos:
            rpath = os.path.join(directory, repo)
            try:
                if os.path.isdir(rpath):
                    git.pull(rpath)
                else:
                    git.clone(config.clone_url(classroom, repo), rpath)
            except ClassHubError as e:
                print(f"ERROR: {e}", file=sys.stderr)
                failed.append(repo)
        return failed
