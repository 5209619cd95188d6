"""Requirement-driven validator scheduling.

A requirements document groups validators into requirements and lets a
validator name prerequisites that must pass before it runs. The scheduler
orders validators so prerequisites run first, quarantines validators whose
prerequisites are missing or cyclic, skips validators whose prerequisites did
not pass, and annotates the document with the outcome.
"""

from collections import deque
from dataclasses import dataclass, field

import networkx as nx
from loguru import logger

from ..config import ValidatorParameters
from ..map.map_graph import LaneletMapGraph
from ..schema.models import IssueRecord, RequirementsDocument
from .base import Primitive, Severity, ValidationIssue, combine
from .registry import available_checks, run_validator

UNRESOLVABLE_MESSAGE = "Prerequisites don't exist OR they are making a loop."
BLOCKED_MESSAGE = "Prerequisites didn't pass."


@dataclass
class ValidatorState:
    """Scheduling state of one validator during a single run."""

    name: str
    # prerequisite name -> forgive warnings
    prerequisites: dict[str, bool] = field(default_factory=dict)
    issues: list[ValidationIssue] = field(default_factory=list)
    max_severity: Severity = Severity.NONE
    evaluated: bool = False

    @property
    def passed(self) -> bool:
        """A validator passes once evaluated without any issue."""
        return self.evaluated and not self.issues

    def record(self, issues: list[ValidationIssue]) -> None:
        """Store the outcome; only the first call has an effect."""
        if self.evaluated:
            return
        self.issues = list(issues)
        self.max_severity = combine(issue.severity for issue in issues)
        self.evaluated = True


@dataclass
class RequirementsReport:
    """Outcome of processing a requirements document."""

    document: RequirementsDocument
    validators: dict[str, ValidatorState]
    execution_order: list[str]
    unresolvable: list[str]

    @property
    def issues(self) -> list[tuple[str, ValidationIssue]]:
        """All issues as (validator name, issue), in execution order first."""
        names = self.execution_order + self.unresolvable
        return [
            (name, issue)
            for name in names
            for issue in self.validators[name].issues
        ]

    @property
    def error_count(self) -> int:
        return sum(1 for _, i in self.issues if i.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for _, i in self.issues if i.severity == Severity.WARNING)

    @property
    def issue_count(self) -> int:
        return len(self.issues)

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.document.requirements)


def collect_validators(document: RequirementsDocument) -> dict[str, ValidatorState]:
    """Collect the validator set declared by a requirements document.

    A validator declared in several requirements is scheduled once with the
    union of its prerequisites. A prerequisite forgives warnings only if every
    declaration of it says so.
    """
    states: dict[str, ValidatorState] = {}
    for requirement in document.requirements:
        for entry in requirement.validators:
            state = states.setdefault(entry.name, ValidatorState(entry.name))
            for prereq in entry.prerequisites:
                if prereq.name in state.prerequisites:
                    state.prerequisites[prereq.name] = (
                        state.prerequisites[prereq.name] and prereq.forgive_warnings
                    )
                else:
                    state.prerequisites[prereq.name] = prereq.forgive_warnings
    return states


def build_dependency_graph(validators: dict[str, ValidatorState]) -> nx.DiGraph:
    """Build a graph with an edge from each prerequisite to its dependents.

    Prerequisites missing from the validator set still get a node (flagged
    ``declared=False``) so that they count towards in-degree.
    """
    graph = nx.DiGraph()
    for name in validators:
        graph.add_node(name, declared=True)

    for name, state in validators.items():
        for prereq in state.prerequisites:
            if not graph.has_node(prereq):
                graph.add_node(prereq, declared=False)
            graph.add_edge(prereq, name)

    return graph


def topological_order(
    validators: dict[str, ValidatorState],
) -> tuple[list[str], list[str]]:
    """Order validators so that each runs after all its prerequisites.

    Kahn's algorithm over an explicit worklist. Ready validators are taken in
    sorted name order, so the order is deterministic but does not follow
    declaration order.

    Returns:
        (execution order, sorted names of unresolvable validators). A
        validator is unresolvable when a prerequisite is missing or it sits on
        or behind a cycle.
    """
    graph = build_dependency_graph(validators)
    in_degree = {name: graph.in_degree(name) for name in validators}

    queue = deque(sorted(name for name, degree in in_degree.items() if degree == 0))
    order: list[str] = []

    while queue:
        name = queue.popleft()
        order.append(name)
        for dependent in sorted(graph.successors(name)):
            in_degree[dependent] -= 1
            if in_degree[dependent] == 0:
                queue.append(dependent)

    # Only final once the worklist has drained
    scheduled = set(order)
    unresolvable = sorted(name for name in validators if name not in scheduled)
    return order, unresolvable


def prerequisites_passed(
    state: ValidatorState, validators: dict[str, ValidatorState]
) -> bool:
    """Check if a validator's prerequisites allow it to run.

    An Error always blocks. A Warning blocks unless that prerequisite is
    declared with forgive_warnings.
    """
    for prereq, forgive_warnings in state.prerequisites.items():
        severity = validators[prereq].max_severity
        if severity == Severity.ERROR:
            return False
        if severity == Severity.WARNING and not forgive_warnings:
            return False
    return True


def _synthetic_issue(message: str) -> ValidationIssue:
    return ValidationIssue(Severity.ERROR, Primitive.PRIMITIVE, 0, message)


def run_scheduled(
    validators: dict[str, ValidatorState],
    lanelet_map: LaneletMapGraph,
    parameters: ValidatorParameters | None = None,
) -> tuple[list[str], list[str]]:
    """Run every validator in dependency order, gating on prerequisites.

    Returns:
        (execution order, unresolvable names) as computed by topological_order.
    """
    order, unresolvable = topological_order(validators)
    registered = set(available_checks())

    for name in unresolvable:
        logger.warning("Validator '{}' has unresolvable prerequisites", name)
        validators[name].record([_synthetic_issue(UNRESOLVABLE_MESSAGE)])

    for name in order:
        state = validators[name]

        if not prerequisites_passed(state, validators):
            logger.info("Skipping validator '{}': prerequisites didn't pass", name)
            state.record([_synthetic_issue(BLOCKED_MESSAGE)])
            continue

        if name not in registered:
            logger.warning("No validator named '{}' is registered", name)
            state.record([_synthetic_issue(f"No validator named '{name}' is available.")])
            continue

        state.record(run_validator(name, lanelet_map, parameters).issues)

    return order, unresolvable


def annotate_document(
    document: RequirementsDocument, validators: dict[str, ValidatorState]
) -> None:
    """Write pass/fail and issues back into the requirements document."""
    for requirement in document.requirements:
        for entry in requirement.validators:
            state = validators[entry.name]
            entry.passed = state.passed
            entry.issues = [
                IssueRecord.model_validate(issue.to_dict()) for issue in state.issues
            ]
        requirement.passed = all(entry.passed for entry in requirement.validators)
        requirement.issues = [
            issue for entry in requirement.validators for issue in entry.issues
        ]


def process_requirements(
    document: RequirementsDocument,
    lanelet_map: LaneletMapGraph,
    parameters: ValidatorParameters | None = None,
) -> RequirementsReport:
    """Schedule, run and annotate the validators of a requirements document.

    Validator failures never raise; each degrades to an Error issue on the
    validator concerned.

    Args:
        document: The requirements document; annotated in place.
        lanelet_map: The map to validate.
        parameters: Validator parameters.

    Returns:
        The report, holding the annotated document.
    """
    validators = collect_validators(document)
    logger.info("Scheduling {} validator(s)", len(validators))

    order, unresolvable = run_scheduled(validators, lanelet_map, parameters)
    annotate_document(document, validators)

    return RequirementsReport(
        document=document,
        validators=validators,
        execution_order=order,
        unresolvable=unresolvable,
    )
