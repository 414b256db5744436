from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

User = get_user_model()

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128


class SignupSerializer(serializers.ModelSerializer):
    password = serializers.CharField(
        write_only=True,
        min_length=PASSWORD_MIN_LENGTH,
        max_length=PASSWORD_MAX_LENGTH,
    )
    email = serializers.EmailField()

    class Meta:
        model = User
        fields = ['username', 'email', 'password', 'name']

    def validate_email(self, value):
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("此電子郵件已被註冊")
        return value

    def validate(self, attrs):
        validate_password(attrs['password'], user=User(username=attrs.get('username'), email=attrs.get('email')))
        return attrs

    def create(self, validated_data):
        # Self-service signups never get an elevated role
        return User.objects.create_user(
            username=validated_data['username'],
            email=validated_data['email'],
            password=validated_data['password'],
            name=validated_data.get('name', ''),
            role=User.ROLE_USER,
        )


class LoginSerializer(serializers.Serializer):
    username = serializers.CharField(required=False)
    email = serializers.EmailField(required=False)
    password = serializers.CharField(write_only=True)

    def validate(self, attrs):
        username = attrs.get("username")
        email = attrs.get("email")
        if not username and email:
            user = User.objects.filter(email__iexact=email).first()
            username = user.username if user else None
        if not username:
            raise serializers.ValidationError("帳號或密碼錯誤")

        user = authenticate(username=username, password=attrs.get("password"))
        if not user:
            raise serializers.ValidationError("帳號或密碼錯誤")

        attrs["user"] = user
        return attrs


class ForgotPasswordSerializer(serializers.Serializer):
    email = serializers.EmailField()
    redirectTo = serializers.URLField(required=False, allow_blank=True)


class ResetPasswordSerializer(serializers.Serializer):
    uid = serializers.CharField()
    token = serializers.CharField()
    newPassword = serializers.CharField(min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)


class MeSerializer(serializers.ModelSerializer):
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'name', 'role', 'banned', 'createdAt']
