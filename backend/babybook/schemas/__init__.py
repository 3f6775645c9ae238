from .album import Album
from .guestbook import GuestbookEntry, GuestbookSubmit, GuestbookSubmitResult
from .journal import JournalPreview
from .milestone import Milestone, MilestoneBase
from .photo import GalleryPage, Photo, PhotoBase
from .site import SiteSettings, Token
