from django.utils import timezone
from django.utils.dateparse import parse_datetime
from rest_framework import serializers

from .models import GENDER_CHOICES, Team, TeamMember, TeamStaff, UserPlayer

GENDER_VALUES = [value for value, _ in GENDER_CHOICES]


def same_message(message, *keys):
    keys = keys or ("required", "null", "blank")
    return {key: message for key in keys}


class BirthdayField(serializers.DateField):
    """
    DateField that also takes full ISO datetimes (the web client sends
    ``Date.toISOString()``) and keeps the local calendar day.
    """

    def to_internal_value(self, value):
        if isinstance(value, str) and "T" in value:
            parsed = parse_datetime(value)
            if parsed is not None:
                if timezone.is_aware(parsed):
                    parsed = timezone.localtime(parsed)
                return parsed.date()
        return super().to_internal_value(value)


class BanFieldsMixin(serializers.Serializer):
    isBanned = serializers.BooleanField(source="is_banned", required=False)
    banReason = serializers.CharField(source="ban_reason", required=False, allow_blank=True, allow_null=True)
    banUntil = serializers.DateTimeField(source="ban_until", required=False, allow_null=True)


# -----------------------------------------
# TEAM MEMBERS
# -----------------------------------------
class TeamMemberSerializer(BanFieldsMixin, serializers.ModelSerializer):
    teamId = serializers.IntegerField(source="team_id", read_only=True)
    name = serializers.CharField(
        max_length=50,
        error_messages={**same_message("姓名不能為空"), "max_length": "姓名不能超過50字"},
    )
    role = serializers.CharField(max_length=50, error_messages=same_message("角色不能為空"))
    gender = serializers.ChoiceField(
        choices=GENDER_VALUES,
        error_messages=same_message("性別必須是 M 或 F", "required", "null", "blank", "invalid_choice"),
    )
    birthday = BirthdayField(
        error_messages={**same_message("生日不能為空"), "invalid": "生日格式不正確"},
    )
    phone = serializers.CharField(max_length=30, required=False, allow_blank=True, allow_null=True)
    lineId = serializers.CharField(source="line_id", max_length=100, required=False, allow_blank=True, allow_null=True)
    email = serializers.EmailField(
        required=False,
        allow_blank=True,
        allow_null=True,
        error_messages={"invalid": "請輸入有效的電子郵件"},
    )
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = TeamMember
        fields = [
            "id",
            "teamId",
            "name",
            "role",
            "gender",
            "birthday",
            "phone",
            "lineId",
            "email",
            "isBanned",
            "banReason",
            "banUntil",
            "createdAt",
            "updatedAt",
        ]


class TeamMemberCreateSerializer(TeamMemberSerializer):
    teamId = serializers.IntegerField(source="team_id", error_messages=same_message("隊伍 ID 是必需的"))


class TeamMemberBatchItemSerializer(TeamMemberSerializer):
    role = serializers.CharField(max_length=50, required=False, default="選手")
    gender = serializers.ChoiceField(
        choices=GENDER_VALUES,
        required=False,
        default="M",
        error_messages=same_message("性別必須是 M 或 F", "invalid_choice"),
    )


class TeamMemberBatchSerializer(serializers.Serializer):
    teamId = serializers.IntegerField(error_messages=same_message("請提供有效的隊伍 ID 和成員資料"))
    members = TeamMemberBatchItemSerializer(
        many=True,
        allow_empty=False,
        error_messages=same_message("請提供有效的隊伍 ID 和成員資料", "required", "null", "empty", "not_a_list"),
    )


# -----------------------------------------
# TEAM STAFF
# -----------------------------------------
STAFF_REQUIRED_MESSAGE = "隊伍ID、職位和姓名為必填欄位"


class TeamStaffSerializer(serializers.ModelSerializer):
    teamId = serializers.IntegerField(source="team_id", error_messages=same_message(STAFF_REQUIRED_MESSAGE))
    teamName = serializers.CharField(source="team.name", read_only=True)
    role = serializers.ChoiceField(
        choices=[value for value, _ in TeamStaff.ROLE_CHOICES],
        error_messages={
            **same_message(STAFF_REQUIRED_MESSAGE),
            "invalid_choice": "職位必須是 leader（領隊）或 coach（教練）",
        },
    )
    name = serializers.CharField(max_length=50, error_messages=same_message(STAFF_REQUIRED_MESSAGE))
    phone = serializers.CharField(max_length=30, required=False, allow_blank=True, allow_null=True)
    email = serializers.EmailField(
        required=False,
        allow_blank=True,
        allow_null=True,
        error_messages={"invalid": "請輸入有效的電子郵件"},
    )
    address = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    lineId = serializers.CharField(source="line_id", max_length=100, required=False, allow_blank=True, allow_null=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = TeamStaff
        fields = [
            "id",
            "teamId",
            "teamName",
            "role",
            "name",
            "phone",
            "email",
            "address",
            "lineId",
            "createdAt",
            "updatedAt",
        ]


class TeamStaffUpdateSerializer(TeamStaffSerializer):
    teamId = serializers.IntegerField(source="team_id", read_only=True)


# -----------------------------------------
# USER PLAYERS
# -----------------------------------------
PLAYER_REQUIRED_MESSAGE = "姓名、性別和生日為必填欄位"


class UserPlayerSerializer(BanFieldsMixin, serializers.ModelSerializer):
    userId = serializers.IntegerField(source="user_id", read_only=True)
    name = serializers.CharField(max_length=50, error_messages=same_message(PLAYER_REQUIRED_MESSAGE))
    gender = serializers.ChoiceField(
        choices=GENDER_VALUES,
        error_messages={
            **same_message(PLAYER_REQUIRED_MESSAGE),
            "invalid_choice": "性別必須是 M（男）或 F（女）",
        },
    )
    birthday = BirthdayField(
        error_messages={**same_message(PLAYER_REQUIRED_MESSAGE), "invalid": "生日格式不正確"},
    )
    participationCount = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = UserPlayer
        fields = [
            "id",
            "userId",
            "name",
            "gender",
            "birthday",
            "isBanned",
            "banReason",
            "banUntil",
            "participationCount",
            "createdAt",
            "updatedAt",
        ]

    def get_participationCount(self, obj):
        count = getattr(obj, "participation_count", None)
        return count if count is not None else obj.participations.count()


class UserPlayerBanSerializer(serializers.Serializer):
    banReason = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    banUntil = serializers.DateTimeField(required=False, allow_null=True)


# -----------------------------------------
# TEAMS
# -----------------------------------------
class TeamWriteSerializer(serializers.Serializer):
    name = serializers.CharField(
        max_length=50,
        trim_whitespace=True,
        error_messages={**same_message("隊伍名稱不能為空"), "max_length": "隊伍名稱不能超過50字"},
    )


class TeamOwnerSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField(source="display_name")
    email = serializers.EmailField()


class TeamSerializer(serializers.ModelSerializer):
    userId = serializers.IntegerField(source="user_id", read_only=True)
    user = TeamOwnerSerializer(read_only=True)
    staff = TeamStaffSerializer(many=True, read_only=True)
    members = serializers.SerializerMethodField()
    memberCount = serializers.SerializerMethodField()
    staffCount = serializers.SerializerMethodField()
    registrationCount = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Team
        fields = [
            "id",
            "name",
            "userId",
            "user",
            "staff",
            "members",
            "memberCount",
            "staffCount",
            "registrationCount",
            "createdAt",
            "updatedAt",
        ]

    def _members(self, obj):
        members = list(obj.members.all())
        if not self.context.get("include_banned_members"):
            members = [member for member in members if not member.is_banned]
        return members

    def get_members(self, obj):
        return TeamMemberSerializer(self._members(obj), many=True).data

    def get_memberCount(self, obj):
        count = getattr(obj, "member_count", None)
        return count if count is not None else len(self._members(obj))

    def get_staffCount(self, obj):
        count = getattr(obj, "staff_count", None)
        return count if count is not None else obj.staff.count()

    def get_registrationCount(self, obj):
        count = getattr(obj, "registration_count", None)
        return count if count is not None else obj.registrations.count()


class TeamRegistrationSummarySerializer(serializers.Serializer):
    id = serializers.IntegerField()
    gameId = serializers.IntegerField(source="game_id")
    gameName = serializers.CharField(source="game.name")
    categoryId = serializers.IntegerField(source="category_id")
    categoryName = serializers.CharField(source="category.category_name")
    status = serializers.CharField()
    submittedAt = serializers.DateTimeField(source="submitted_at")


class TeamDetailSerializer(TeamSerializer):
    registrations = TeamRegistrationSummarySerializer(many=True, read_only=True)

    class Meta(TeamSerializer.Meta):
        fields = TeamSerializer.Meta.fields + ["registrations"]
