"""
Report state machine for managing report status transitions
"""

from typing import Dict, List, Set
from ewaste_rewards.models.report import ReportStatus

class ReportStateMachine:
    """
    Manages valid report status transitions

    pending -> in_progress -> completed, forward only, completed is terminal.
    """

    def __init__(self):
        self.transitions: Dict[ReportStatus, Set[ReportStatus]] = {
            ReportStatus.PENDING: {ReportStatus.IN_PROGRESS},
            ReportStatus.IN_PROGRESS: {ReportStatus.COMPLETED},
            ReportStatus.COMPLETED: set()  # Terminal state
        }

    def can_transition(
        self,
        current_status: ReportStatus,
        new_status: ReportStatus
    ) -> bool:
        """
        Check if transition is valid

        Args:
            current_status: Current report status
            new_status: Desired new status

        Returns:
            True if transition is allowed
        """
        valid_transitions = self.transitions.get(ReportStatus(current_status), set())
        return ReportStatus(new_status) in valid_transitions

    def get_valid_transitions(self, current_status: ReportStatus) -> List[ReportStatus]:
        return list(self.transitions.get(ReportStatus(current_status), set()))

    def is_terminal_state(self, status: ReportStatus) -> bool:
        return len(self.transitions.get(ReportStatus(status), set())) == 0

report_state_machine = ReportStateMachine()
