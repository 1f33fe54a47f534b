"""Role-gated status workflows.

A workflow is a table keyed by (current, target) status pairs. Each pair maps
to the set of roles allowed to request that step. A pair mapped to an empty
set is a legal step that only the system takes (for example, marking a product
sold while placing an order); no caller role can request it directly.

Checks run in a fixed order: the step must exist, then the caller's role must
be allowed. Step-specific requirements (an assignee, a price) are checked by
the aggregate after both.
"""

from collections.abc import Iterable, Mapping
from enum import Enum

from protean.exceptions import ValidationError

from marketplace.shared.errors import AuthorizationError
from marketplace.shared.roles import Role


class Workflow:
    def __init__(
        self,
        subject: str,
        statuses: type[Enum],
        steps: Mapping[tuple[Enum, Enum], Iterable[Role]],
    ) -> None:
        self.subject = subject
        self.statuses = statuses
        self._steps = {pair: frozenset(roles) for pair, roles in steps.items()}

    def status(self, value: "str | Enum") -> Enum:
        """Coerce a stored status string into the workflow's enum."""
        if isinstance(value, self.statuses):
            return value
        try:
            return self.statuses(value)
        except ValueError:
            raise ValidationError({"status": [f"Unknown {self.subject} status '{value}'"]}) from None

    def successors(self, current: "str | Enum") -> set[Enum]:
        current = self.status(current)
        return {target for (source, target) in self._steps if source == current}

    def is_terminal(self, current: "str | Enum") -> bool:
        return not self.successors(current)

    def allowed_roles(self, current: "str | Enum", target: "str | Enum") -> frozenset[Role]:
        return self._steps.get((self.status(current), self.status(target)), frozenset())

    def assert_step_exists(self, current: "str | Enum", target: "str | Enum") -> None:
        current, target = self.status(current), self.status(target)
        if (current, target) in self._steps:
            return

        if self.is_terminal(current):
            raise ValidationError({"status": [f"{self.subject.capitalize()} is already {current.value}"]})
        raise ValidationError(
            {"status": [f"Cannot move {self.subject} from {current.value} to {target.value}"]}
        )

    def assert_allowed(self, current: "str | Enum", target: "str | Enum", role: Role) -> None:
        """Raise unless `role` may move the subject from `current` to `target`."""
        self.assert_step_exists(current, target)

        if role not in self.allowed_roles(current, target):
            raise AuthorizationError(
                f"{role.value} is not allowed to move {self.subject} "
                f"from {self.status(current).value} to {self.status(target).value}"
            )
