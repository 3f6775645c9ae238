from babybook.models.album import Album
from babybook.models.guestbook import GuestbookEntry
from babybook.models.journal import JournalEntry
from babybook.models.milestone import Milestone
from babybook.models.photo import Photo
from babybook.models.site_setting import SiteSetting
from babybook.models.user import Admin, AuthSession, Member, User
