import pytest


SAMPLE_RESUME = """\
Curriculum Vitae
Aisha Khan
Frontend engineer with 6 years of experience building React and TypeScript apps.
Led migration of a legacy dashboard to Next.js.
Mentors junior developers.
aisha.khan@example.com | +971 50 123 4567 | Dubai, UAE
Skills: React, Redux, Jest, Tailwind, AWS
"""


@pytest.fixture
def sample_resume():
    return SAMPLE_RESUME


@pytest.fixture
def sample_resume_bytes():
    return SAMPLE_RESUME.encode("utf-8")
