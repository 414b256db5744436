from .games import (
    GameListCreateView,
    GameDetailView,
    GameFeeListView,
    GameDetailInfoView,
    GameRegistrationExportView,
    RegionListView,
)
from .categories import (
    GameCategoryListCreateView,
    GameCategoryDetailView,
)
from .registrations import (
    GameSignupView,
    GameRegistrationListView,
    MyRegistrationListView,
    RegistrationResubmitView,
    RegistrationReviewView,
)
