from django.urls import path

from .models import Registration
from .views import (
    GameCategoryDetailView,
    GameCategoryListCreateView,
    GameDetailInfoView,
    GameDetailView,
    GameFeeListView,
    GameListCreateView,
    GameRegistrationExportView,
    GameRegistrationListView,
    GameSignupView,
    MyRegistrationListView,
    RegionListView,
    RegistrationResubmitView,
    RegistrationReviewView,
)

urlpatterns = [
    # Games
    path("games", GameListCreateView.as_view(), name="game-list"),
    path("games/<int:game_id>", GameDetailView.as_view(), name="game-detail"),
    path("games/<int:game_id>/registrations", GameRegistrationListView.as_view(), name="game-registrations"),
    path("games/<int:game_id>/registrations/export", GameRegistrationExportView.as_view(), name="game-registrations-export"),
    path("games/<int:game_id>/signup", GameSignupView.as_view(), name="game-signup"),

    # Categories / fees / detail
    path("game_category", GameCategoryListCreateView.as_view(), name="game-category-list"),
    path("game_category/<int:category_id>", GameCategoryDetailView.as_view(), name="game-category-detail"),
    path("game_fee", GameFeeListView.as_view(), name="game-fee-list"),
    path("game_detail", GameDetailInfoView.as_view(), name="game-detail-info"),
    path("regions", RegionListView.as_view(), name="region-list"),

    # Registrations
    path("registration", MyRegistrationListView.as_view(), name="registration-list"),
    path(
        "registration/approve",
        RegistrationReviewView.as_view(review_status=Registration.STATUS_APPROVED),
        name="registration-approve",
    ),
    path(
        "registration/reject",
        RegistrationReviewView.as_view(review_status=Registration.STATUS_REJECTED),
        name="registration-reject",
    ),
    path("registration/<int:registration_id>", RegistrationResubmitView.as_view(), name="registration-detail"),
]
