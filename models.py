from typing import List, Literal, Optional

from pydantic import BaseModel, Field, PositiveInt, field_validator

from theme import normalize_hex


STREAMS = ("landing-page", "pitch-deck", "marketing")


# --- App description (request input) ---
class BrandColors(BaseModel):
    primary: str
    secondary: str
    accent: str

    @field_validator("primary", "secondary", "accent")
    @classmethod
    def check_hex(cls, value: str) -> str:
        if normalize_hex(value) is None:
            raise ValueError(f"'{value}' is not a hex colour")
        return value


class AppInput(BaseModel):
    appName: str = Field(..., min_length=1)
    tagline: str = Field(..., min_length=1)
    targetAudience: str = Field(..., min_length=1)
    problemSolved: str = Field(..., min_length=1)
    keyFeatures: List[str]
    brandColors: Optional[BrandColors] = None
    stylePreference: Literal["modern", "minimal", "bold", "elegant"] = "modern"
    competitors: Optional[str] = None
    fundingStage: Optional[Literal["pre-seed", "seed", "series-a", "series-b", "bootstrapped"]] = None

    @field_validator("appName", "tagline", "targetAudience", "problemSolved")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()

    @field_validator("keyFeatures")
    @classmethod
    def at_least_three_features(cls, value: List[str]) -> List[str]:
        features = [f.strip() for f in value if f and f.strip()]
        if len(features) < 3:
            raise ValueError("At least 3 key features are required")
        return features


# --- Pitch deck ---
class SlideContent(BaseModel):
    slideNumber: PositiveInt
    title: str
    content: List[str]
    speakerNotes: Optional[str] = None
    # Unrecognised values render as "bullets".
    layout: Optional[str] = None


class PresentationMetadata(BaseModel):
    title: str
    subtitle: str
    author: str
    date: str  # YYYY-MM-DD


class PitchDeckOutput(BaseModel):
    slides: List[SlideContent] = Field(..., min_length=1)
    metadata: PresentationMetadata
    brandColors: Optional[BrandColors] = None
    pptxBase64: Optional[str] = None
    pptxError: Optional[str] = None


# --- Landing page ---
class Hero(BaseModel):
    headline: str
    subheadline: str
    cta: str

class Feature(BaseModel):
    title: str
    description: str
    icon: str

class Benefit(BaseModel):
    title: str
    description: str

class HowItWorksStep(BaseModel):
    step: int
    title: str
    description: str

class Testimonial(BaseModel):
    name: str
    role: str
    content: str
    avatar: str

class CallToAction(BaseModel):
    headline: str
    description: str
    buttonText: str

class FooterLinkGroup(BaseModel):
    category: str
    items: List[str]

class Footer(BaseModel):
    links: List[FooterLinkGroup]

class LandingPageOutput(BaseModel):
    hero: Hero
    features: List[Feature]
    benefits: List[Benefit]
    howItWorks: List[HowItWorksStep]
    testimonials: List[Testimonial]
    cta: CallToAction
    footer: Footer
    reactCode: str
    htmlCode: str


# --- Marketing ---
class SocialPost(BaseModel):
    content: str
    hashtags: List[str]
    imagePrompt: Optional[str] = None
    characterCount: Optional[int] = None

class MarketingContent(BaseModel):
    platform: str
    posts: List[SocialPost]

class GoogleAd(BaseModel):
    headline1: str
    headline2: str
    headline3: str
    description1: str
    description2: str

class EmailTemplate(BaseModel):
    subject: str
    preheader: str
    body: str

class MarketingOutput(BaseModel):
    instagram: MarketingContent
    twitter: MarketingContent
    facebook: MarketingContent
    linkedin: MarketingContent
    googleAds: List[GoogleAd]
    emailTemplate: EmailTemplate


# --- Combined result, status and download ---
class GenerationResult(BaseModel):
    projectId: str
    landingPage: Optional[LandingPageOutput] = None
    pitchDeck: Optional[PitchDeckOutput] = None
    marketing: Optional[MarketingOutput] = None
    createdAt: str


class GenerationStatus(BaseModel):
    status: Literal["idle", "generating", "completed", "error"]
    progress: int = Field(0, ge=0, le=100)
    currentAgent: Optional[Literal["landing-page", "pitch-deck", "marketing"]] = None
    message: Optional[str] = None
    updatedAt: Optional[str] = None


class StatusUpdate(GenerationStatus):
    projectId: str = Field(..., min_length=1)


class DownloadRequest(BaseModel):
    type: Literal["landing-page", "pitch-deck", "pitch-deck-pptx", "marketing", "all"]
    data: GenerationResult
