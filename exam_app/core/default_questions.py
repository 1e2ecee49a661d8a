"""Built-in question pool used when no question file is configured."""

from __future__ import annotations

from exam_app.core.models import Question

DEFAULT_QUESTIONS: tuple[Question, ...] = (
    Question(
        id="q1",
        prompt=(
            "A project manager identifies a risk with a high probability and high "
            "impact. What should be the BEST response strategy?"
        ),
        options=(
            "A. Accept the risk.",
            "B. Mitigate the risk.",
            "C. Avoid the risk.",
            "D. Transfer the risk.",
        ),
        correct_option="C. Avoid the risk.",
        rationale=(
            "Avoiding the risk means eliminating the threat entirely, which is the best "
            "approach for high probability, high impact negative risks if feasible."
        ),
    ),
    Question(
        id="q2",
        prompt=(
            "During project execution, a team member reports that a newly implemented "
            "feature is causing unforeseen issues. What should the project manager do FIRST?"
        ),
        options=(
            "A. Immediately revert the feature.",
            "B. Document the issue and raise a change request.",
            "C. Update the risk register.",
            "D. Analyze the impact of the issue.",
        ),
        correct_option="D. Analyze the impact of the issue.",
        rationale=(
            "The project manager should always analyze the impact of any issue before "
            "taking action. This ensures a proper understanding of the problem and its "
            "consequences."
        ),
    ),
    Question(
        id="q3",
        prompt=(
            "The project sponsor requests a new feature that was not part of the original "
            "scope. What is the BEST course of action for the project manager?"
        ),
        options=(
            "A. Add the feature to the backlog immediately.",
            "B. Assess the impact on schedule and budget, then escalate to the change control board.",
            "C. Implement the feature if it seems small.",
            "D. Inform the sponsor that it is out of scope.",
        ),
        correct_option=(
            "B. Assess the impact on schedule and budget, then escalate to the change control board."
        ),
        rationale=(
            "Any new request, especially from the sponsor, requires formal change control "
            "process. The PM should analyze its impact and then involve the change control "
            "board for approval."
        ),
    ),
    Question(
        id="q4",
        prompt=(
            "A project team is consistently missing deadlines due to miscommunication. What "
            "technique should the project manager utilize to improve team performance?"
        ),
        options=(
            "A. Implement stricter control measures.",
            "B. Conduct daily stand-up meetings to improve communication flow.",
            "C. Replace underperforming team members.",
            "D. Reassign tasks to more experienced individuals.",
        ),
        correct_option="B. Conduct daily stand-up meetings to improve communication flow.",
        rationale=(
            "Daily stand-up meetings (a key Agile practice) are designed to improve team "
            "communication, identify impediments, and foster collaboration, directly "
            "addressing miscommunication."
        ),
    ),
    Question(
        id="q5",
        prompt=(
            "The project is nearing completion, and some deliverables are pending final "
            "acceptance. What project management process is the project manager currently "
            "executing?"
        ),
        options=(
            "A. Manage Communications.",
            "B. Control Quality.",
            "C. Validate Scope.",
            "D. Close Project or Phase.",
        ),
        correct_option="C. Validate Scope.",
        rationale=(
            "Validate Scope is the process of formalizing acceptance of the completed "
            "project deliverables. This occurs before closing the project or phase."
        ),
    ),
)
