from schemas.imports import *


class DashboardStats(BaseModel):
    totalUsers: int
    totalBlogs: int
    publishedBlogs: int
    totalProjects: int
    publishedProjects: int
    totalContacts: int
    unreadContacts: int
    totalAchievements: int
    publishedAchievements: int
    totalSections: int
    publishedSections: int


class RecentBlog(BaseModel):
    id: str
    title: str
    is_published: bool
    created_at: datetime
    author: Optional[AuthorOut] = None


class RecentContact(BaseModel):
    id: str
    name: str
    email: str
    subject: str
    is_read: bool
    created_at: datetime


class RecentActivity(BaseModel):
    blogs: List[RecentBlog] = Field(default_factory=list)
    contacts: List[RecentContact] = Field(default_factory=list)


class DashboardOut(BaseModel):
    stats: DashboardStats
    recentActivity: RecentActivity
