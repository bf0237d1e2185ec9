import logging
from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from lookin.models.safety_report import SafetyReport
from lookin.models.user import User
from lookin.schemas.safety import SafetyInfo, SafetyFeature, SafetyTipSection, ReportCreate

logger = logging.getLogger(__name__)

SAFETY_FEATURES = [
    SafetyFeature(
        title="ID Verification",
        description="All users must verify their identity with government-issued ID",
        status="active",
    ),
    SafetyFeature(
        title="Secure Messaging",
        description="All messages are encrypted and monitored for safety",
        status="active",
    ),
    SafetyFeature(
        title="Profile Review",
        description="Every profile is manually reviewed before approval",
        status="active",
    ),
    SafetyFeature(
        title="Community Guidelines",
        description="Strict community standards enforced by our moderation team",
        status="active",
    ),
]

SAFETY_TIPS = [
    SafetyTipSection(category="Meeting Up", tips=[
        "Always meet in a public place for the first time",
        "Tell a friend or family member where you're going",
        "Consider bringing a friend to the first meeting",
        "Trust your instincts - if something feels off, leave",
        "Arrange your own transportation to and from the meeting",
    ]),
    SafetyTipSection(category="Online Safety", tips=[
        "Keep personal information private until you feel comfortable",
        "Don't share your home address in initial messages",
        "Use the platform's messaging system rather than personal contact",
        "Never send money or financial information",
        "Be wary of users who push to move conversations off-platform quickly",
    ]),
    SafetyTipSection(category="Red Flags", tips=[
        "Refuses to verify their identity or provide additional information",
        "Pressures you to make quick decisions about living arrangements",
        "Stories about their background don't add up or change",
        "Avoids talking on the phone or meeting in person",
        "Requests money upfront or unusual payment methods",
    ]),
]

REPORT_REASONS = [
    "Inappropriate content or behavior",
    "Fake or misleading profile",
    "Harassment or threatening behavior",
    "Spam or promotional content",
    "Suspicious activity",
    "Other",
]


class SafetyService:
    """Safety centre content and user reports."""

    @staticmethod
    def get_info() -> SafetyInfo:
        return SafetyInfo(
            features=SAFETY_FEATURES,
            tips=SAFETY_TIPS,
            report_reasons=REPORT_REASONS,
        )

    @staticmethod
    def submit_report(db: Session, report_data: ReportCreate, reporter: User) -> SafetyReport:
        if report_data.reason not in REPORT_REASONS:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Unknown report reason"
            )

        if report_data.reported_user_id is not None:
            if report_data.reported_user_id == reporter.id:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="You cannot report yourself"
                )
            reported = db.query(User).filter(User.id == report_data.reported_user_id).first()
            if not reported:
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail="User not found"
                )

        report = SafetyReport(
            reporter_id=reporter.id,
            reported_user_id=report_data.reported_user_id,
            reason=report_data.reason,
            details=report_data.details,
        )
        db.add(report)
        db.commit()
        db.refresh(report)

        logger.warning(
            f"Safety report {report.id} filed by user {reporter.id} "
            f"against user {report.reported_user_id}: {report.reason}"
        )
        return report
