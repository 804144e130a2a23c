"""
Profile mappers for VA profiles and companies.
"""

from app.domain.models.profile import VAProfile, Company
from app.infrastructure.db.models import VAProfileModel, CompanyModel
from .base_mapper import BaseMapper, to_float


class VAProfileMapper(BaseMapper):
    """Maps between VAProfile and VAProfileModel."""

    def domain_to_model(self, profile: VAProfile) -> VAProfileModel:
        return VAProfileModel(
            id=profile.id,
            user_id=profile.user_id,
            name=profile.name,
            bio=profile.bio,
            country=profile.country,
            hourly_rate=profile.hourly_rate,
            skills=list(profile.skills),
            availability=profile.availability,
            email=profile.email,
            phone=profile.phone,
            timezone=profile.timezone,
            languages=profile.languages,
            work_experience=profile.work_experience,
            education=profile.education,
            avatar_url=profile.avatar_url,
            resume_url=profile.resume_url,
            video_intro_url=profile.video_intro_url,
            profile_views=profile.profile_views,
            average_rating=profile.average_rating,
            total_reviews=profile.total_reviews,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )

    def model_to_domain(self, model: VAProfileModel) -> VAProfile:
        return VAProfile(
            id=model.id,
            user_id=model.user_id,
            name=model.name,
            bio=model.bio,
            country=model.country,
            hourly_rate=to_float(model.hourly_rate),
            skills=list(model.skills or []),
            availability=bool(model.availability),
            email=model.email,
            phone=model.phone,
            timezone=model.timezone,
            languages=model.languages,
            work_experience=model.work_experience,
            education=model.education,
            avatar_url=model.avatar_url,
            resume_url=model.resume_url,
            video_intro_url=model.video_intro_url,
            profile_views=model.profile_views or 0,
            average_rating=to_float(model.average_rating),
            total_reviews=model.total_reviews or 0,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


class CompanyMapper(BaseMapper):
    """Maps between Company and CompanyModel."""

    def domain_to_model(self, company: Company) -> CompanyModel:
        return CompanyModel(
            id=company.id,
            user_id=company.user_id,
            name=company.name,
            bio=company.bio,
            country=company.country,
            website=company.website,
            industry=company.industry,
            company_size=company.company_size,
            founded_year=company.founded_year,
            description=company.description,
            mission=company.mission,
            values=list(company.values),
            benefits=list(company.benefits),
            email=company.email,
            phone=company.phone,
            logo_url=company.logo_url,
            social_links=company.social_links,
            tech_stack=list(company.tech_stack),
            verification_level=company.verification_level,
            created_at=company.created_at,
            updated_at=company.updated_at,
        )

    def model_to_domain(self, model: CompanyModel) -> Company:
        return Company(
            id=model.id,
            user_id=model.user_id,
            name=model.name,
            bio=model.bio,
            country=model.country,
            website=model.website,
            industry=model.industry,
            company_size=model.company_size,
            founded_year=model.founded_year,
            description=model.description,
            mission=model.mission,
            values=list(model.values or []),
            benefits=list(model.benefits or []),
            email=model.email,
            phone=model.phone,
            logo_url=model.logo_url,
            social_links=model.social_links,
            tech_stack=list(model.tech_stack or []),
            verification_level=model.verification_level or "basic",
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
