from rest_framework import serializers

from .datetime_utils import (
    format_for_api,
    get_game_status,
    get_status_text,
    parse_game_datetime,
)
from .models import (
    Game,
    GameCategory,
    GameDetail,
    GameFee,
    Registration,
    RegistrationParticipant,
)
from .regions import get_region_code, get_region_name, is_valid_region_code, is_valid_region_name

REQUIRED_FIELDS_MESSAGE = "請填寫所有必填欄位"
INCOMPLETE_PARTICIPANT_MESSAGE = "參賽者資料不完整"


def missing_field_messages(field_name):
    message = f"缺少必要欄位: {field_name}"
    return {"required": message, "null": message, "blank": message}


def required_messages(message):
    return {"required": message, "null": message, "blank": message, "empty": message}


class GameDateTimeField(serializers.Field):
    """
    Accepts ISO datetimes and bare dates (local midnight).
    """
    default_error_messages = {
        "invalid": "日期格式不正確",
    }

    def to_internal_value(self, data):
        parsed = parse_game_datetime(data)
        if parsed is None:
            self.fail("invalid")
        return parsed

    def to_representation(self, value):
        return format_for_api(value)


# -----------------------------------------
# WRITE SERIALIZERS
# -----------------------------------------
class GameCategoryInputSerializer(serializers.Serializer):
    categoryName = serializers.CharField(max_length=255, error_messages=required_messages("分類名稱為必填欄位"))
    conditions = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class GameFeeInputSerializer(serializers.Serializer):
    feeType = serializers.CharField(max_length=100, error_messages=required_messages("費用類型為必填欄位"))
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    isRequired = serializers.BooleanField(required=False, default=True)
    note = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    categoryIndex = serializers.IntegerField(required=False, allow_null=True, min_value=0)


class GameWriteSerializer(serializers.Serializer):
    """
    Full game payload for create and update (update is a full replace).
    """
    name = serializers.CharField(max_length=255, error_messages=missing_field_messages("name"))
    region = serializers.CharField(max_length=32, error_messages=missing_field_messages("region"))
    venue = serializers.CharField(max_length=255, error_messages=missing_field_messages("venue"))
    address = serializers.CharField(max_length=255, error_messages=missing_field_messages("address"))
    signupStart = GameDateTimeField(error_messages=missing_field_messages("signupStart"))
    signupEnd = GameDateTimeField(error_messages=missing_field_messages("signupEnd"))
    gameStart = GameDateTimeField(error_messages=missing_field_messages("gameStart"))
    gameEnd = GameDateTimeField(error_messages=missing_field_messages("gameEnd"))

    basis = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    note = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    categories = GameCategoryInputSerializer(many=True, required=False)
    fees = GameFeeInputSerializer(many=True, required=False)

    def validate_region(self, value):
        # Display names such as 臺北市 are stored as their code
        if is_valid_region_name(value):
            return get_region_code(value)
        if not is_valid_region_code(value):
            raise serializers.ValidationError("無效的地區")
        return value

    def validate(self, attrs):
        if attrs["signupStart"] >= attrs["signupEnd"]:
            raise serializers.ValidationError("報名開始時間必須早於報名結束時間")
        if attrs["signupEnd"] >= attrs["gameStart"]:
            raise serializers.ValidationError("報名結束時間必須早於賽事開始時間")
        if attrs["gameStart"] > attrs["gameEnd"]:
            raise serializers.ValidationError("賽事開始時間必須早於賽事結束時間")

        category_count = len(attrs.get("categories") or [])
        for fee in attrs.get("fees") or []:
            index = fee.get("categoryIndex")
            if index is not None and index >= category_count:
                raise serializers.ValidationError("費用的分類索引無效")
        return attrs


class GameCategoryWriteSerializer(serializers.Serializer):
    gameId = serializers.IntegerField(required=False, error_messages=required_messages("賽事 ID 為必填欄位"))
    categoryName = serializers.CharField(max_length=255, error_messages=required_messages("分類名稱為必填欄位"))
    conditions = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class ParticipantInputSerializer(serializers.Serializer):
    userPlayerId = serializers.IntegerField(required=False, allow_null=True)
    teamMemberId = serializers.IntegerField(required=False, allow_null=True)
    isMainPlayer = serializers.BooleanField(required=False, default=False)

    def validate(self, attrs):
        has_player = attrs.get("userPlayerId") is not None
        has_member = attrs.get("teamMemberId") is not None
        # Exactly one source per participant
        if has_player == has_member:
            raise serializers.ValidationError(INCOMPLETE_PARTICIPANT_MESSAGE)
        return attrs


class SignupSerializer(serializers.Serializer):
    categoryId = serializers.IntegerField(error_messages=required_messages(REQUIRED_FIELDS_MESSAGE))
    teamId = serializers.IntegerField(required=False, allow_null=True)
    participants = ParticipantInputSerializer(
        many=True,
        allow_empty=False,
        error_messages=required_messages(REQUIRED_FIELDS_MESSAGE),
    )
    note = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class ResubmitSerializer(serializers.Serializer):
    participants = ParticipantInputSerializer(
        many=True,
        allow_empty=False,
        error_messages=required_messages(REQUIRED_FIELDS_MESSAGE),
    )
    note = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class ReviewSerializer(serializers.Serializer):
    id = serializers.IntegerField(error_messages=required_messages("報名 ID 為必填項目"))


# -----------------------------------------
# READ SERIALIZERS
# -----------------------------------------
class GameFeeSerializer(serializers.ModelSerializer):
    gameId = serializers.IntegerField(source="game_id", read_only=True)
    categoryId = serializers.IntegerField(source="category_id", read_only=True)
    feeType = serializers.CharField(source="fee_type")
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, coerce_to_string=False)
    isRequired = serializers.BooleanField(source="is_required")

    class Meta:
        model = GameFee
        fields = ["id", "gameId", "categoryId", "feeType", "description", "amount", "isRequired", "note"]


class GameCategorySerializer(serializers.ModelSerializer):
    gameId = serializers.IntegerField(source="game_id", read_only=True)
    categoryName = serializers.CharField(source="category_name")
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = GameCategory
        fields = ["id", "gameId", "categoryName", "conditions", "createdAt", "updatedAt"]


class GameCategoryWithFeesSerializer(GameCategorySerializer):
    fees = GameFeeSerializer(many=True, read_only=True)

    class Meta(GameCategorySerializer.Meta):
        fields = GameCategorySerializer.Meta.fields + ["fees"]


class GameDetailSerializer(serializers.ModelSerializer):
    gameId = serializers.IntegerField(source="game_id", read_only=True)

    class Meta:
        model = GameDetail
        fields = ["id", "gameId", "basis", "note"]


class RegistrationParticipantSerializer(serializers.ModelSerializer):
    teamMemberId = serializers.IntegerField(source="team_member_id", read_only=True)
    userPlayerId = serializers.IntegerField(source="user_player_id", read_only=True)
    isMainPlayer = serializers.BooleanField(source="is_main_player", read_only=True)
    name = serializers.SerializerMethodField()
    gender = serializers.SerializerMethodField()
    birthday = serializers.SerializerMethodField()

    class Meta:
        model = RegistrationParticipant
        fields = ["id", "teamMemberId", "userPlayerId", "isMainPlayer", "name", "gender", "birthday"]

    def get_name(self, obj):
        return obj.person.name if obj.person else None

    def get_gender(self, obj):
        return obj.person.gender if obj.person else None

    def get_birthday(self, obj):
        return obj.person.birthday.isoformat() if obj.person and obj.person.birthday else None


class RegistrationSerializer(serializers.ModelSerializer):
    gameId = serializers.IntegerField(source="game_id", read_only=True)
    gameName = serializers.CharField(source="game.name", read_only=True)
    categoryId = serializers.IntegerField(source="category_id", read_only=True)
    categoryName = serializers.CharField(source="category.category_name", read_only=True)
    teamId = serializers.IntegerField(source="team_id", read_only=True)
    teamName = serializers.SerializerMethodField()
    userId = serializers.IntegerField(source="registrant_id", read_only=True)
    submittedAt = serializers.DateTimeField(source="submitted_at", read_only=True)
    reviewedAt = serializers.DateTimeField(source="reviewed_at", read_only=True)
    reviewedBy = serializers.IntegerField(source="reviewed_by_id", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)
    participants = RegistrationParticipantSerializer(many=True, read_only=True)

    class Meta:
        model = Registration
        fields = [
            "id",
            "gameId",
            "gameName",
            "categoryId",
            "categoryName",
            "teamId",
            "teamName",
            "userId",
            "status",
            "note",
            "submittedAt",
            "reviewedAt",
            "reviewedBy",
            "createdAt",
            "updatedAt",
            "participants",
        ]

    def get_teamName(self, obj):
        return obj.team.name if obj.team_id else None


class GameSerializer(serializers.ModelSerializer):
    regionName = serializers.SerializerMethodField()
    signupStart = GameDateTimeField(source="signup_start", read_only=True)
    signupEnd = GameDateTimeField(source="signup_end", read_only=True)
    gameStart = GameDateTimeField(source="game_start", read_only=True)
    gameEnd = GameDateTimeField(source="game_end", read_only=True)
    status = serializers.SerializerMethodField()
    statusText = serializers.SerializerMethodField()
    registrationCount = serializers.SerializerMethodField()
    categoryCount = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Game
        fields = [
            "id",
            "name",
            "region",
            "regionName",
            "venue",
            "address",
            "signupStart",
            "signupEnd",
            "gameStart",
            "gameEnd",
            "status",
            "statusText",
            "registrationCount",
            "categoryCount",
            "createdAt",
            "updatedAt",
        ]

    def get_regionName(self, obj):
        return get_region_name(obj.region)

    def get_status(self, obj):
        return get_game_status(obj)

    def get_statusText(self, obj):
        return get_status_text(get_game_status(obj))

    # Counts come from queryset annotations when available
    def get_registrationCount(self, obj):
        count = getattr(obj, "registration_count", None)
        return count if count is not None else obj.registrations.count()

    def get_categoryCount(self, obj):
        count = getattr(obj, "category_count", None)
        return count if count is not None else obj.categories.count()


class GameFullSerializer(GameSerializer):
    detail = serializers.SerializerMethodField()
    categories = GameCategoryWithFeesSerializer(many=True, read_only=True)
    fees = GameFeeSerializer(many=True, read_only=True)
    registrations = RegistrationSerializer(many=True, read_only=True)

    class Meta(GameSerializer.Meta):
        fields = GameSerializer.Meta.fields + ["detail", "categories", "fees", "registrations"]

    def get_detail(self, obj):
        detail = getattr(obj, "detail", None)
        return GameDetailSerializer(detail).data if detail else None
