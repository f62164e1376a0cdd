"""
Landing Page Content

Copy for the presentational sections of the landing page.
"""

from app.modules.site.schemas import (
    ContactDetail,
    Program,
    SiteContent,
    Stat,
    Testimonial,
)

SITE_CONTENT = SiteContent(
    school_name="Ambassador International School",
    stats=[
        Stat(value=15, suffix="+", label="Years of Excellence"),
        Stat(value=500, suffix="+", label="Students Enrolled"),
        Stat(value=98, suffix="%", label="Success Rate"),
        Stat(value=50, suffix="+", label="Qualified Teachers"),
    ],
    programs=[
        Program(
            title="Pre-School",
            ages="Ages 3-5",
            description="A nurturing environment where young learners develop foundational "
            "skills through play-based learning, creativity, and social interaction.",
        ),
        Program(
            title="Primary Education",
            ages="Ages 6-12",
            description="Comprehensive curriculum covering core subjects with emphasis on "
            "critical thinking, literacy, and numeracy skills.",
        ),
        Program(
            title="Sports Program",
            ages="All Ages",
            description="Physical education and competitive sports including soccer, athletics, "
            "basketball, and swimming to promote fitness and teamwork.",
        ),
        Program(
            title="Arts & Culture",
            ages="All Ages",
            description="Creative expression through visual arts, music, drama, and cultural "
            "programs that celebrate Lesotho's rich heritage.",
        ),
        Program(
            title="STEM Education",
            ages="Ages 7+",
            description="Hands-on learning in science, technology, engineering, and mathematics "
            "with modern computer labs and robotics.",
        ),
        Program(
            title="Languages",
            ages="All Ages",
            description="Multilingual education in English, Sesotho, and French, preparing "
            "students for global communication.",
        ),
    ],
    testimonials=[
        Testimonial(
            name="Malefu Mokhesi",
            role="Parent of Grade 5 Student",
            content="The teachers are caring and dedicated, and the academic standards are "
            "exceptional. My daughter is thriving both academically and socially.",
            rating=5,
        ),
        Testimonial(
            name="Thabo Moshoeshoe",
            role="Parent of Pre-School Students",
            content="The early learning program is engaging, and our kids look forward to "
            "school every day.",
            rating=5,
        ),
        Testimonial(
            name="Dr. Palesa Nthako",
            role="Parent & Community Leader",
            content="The balance between academics, sports, and character development is "
            "exactly what children need.",
            rating=5,
        ),
        Testimonial(
            name="Lebohang Tau",
            role="Former Student, Now University Scholar",
            content="Ambassador prepared me not just academically but for life.",
            rating=5,
        ),
    ],
    contact=[
        ContactDetail(
            title="Address",
            content="Ambassador International School, Maseru, Lesotho",
            link="https://maps.app.goo.gl/YWhGS3nLt4hWNBTw5",
        ),
        ContactDetail(title="Phone", content="+266 63118056", link="tel:+26663118056"),
        ContactDetail(
            title="Email",
            content="mbssdrinternational@gmail.com",
            link="mailto:mbssdrinternational@gmail.com",
        ),
        ContactDetail(title="Office Hours", content="Mon - Fri: 7:30 AM - 4:30 PM"),
    ],
)
