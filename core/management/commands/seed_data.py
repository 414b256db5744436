from datetime import date, timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from games.models import Game, GameCategory, GameDetail, GameFee
from teams.models import Team, TeamMember, TeamStaff, UserPlayer

User = get_user_model()


class Command(BaseCommand):
    help = "Seeds the database with sample users, games, teams and players"

    def add_arguments(self, parser):
        parser.add_argument("--password", default="changeme123", help="Password for the seeded accounts")

    def _user(self, username, role, name, password):
        user, created = User.objects.get_or_create(
            username=username,
            defaults={"email": f"{username}@example.com", "role": role, "name": name},
        )
        if created or not user.check_password(password):
            user.set_password(password)
            user.save()
        return user

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write("🌱 Seeding data...")
        password = options["password"]

        # 1. Users
        self._user("owner", User.ROLE_OWNER, "站長", password)
        self._user("admin", User.ROLE_ADMIN, "管理員", password)
        coach = self._user("coach", User.ROLE_USER, "陳教練", password)

        # 2. Games
        now = timezone.now()
        games_data = [
            {
                "name": "臺北市春季籃球聯賽",
                "region": "taipei",
                "venue": "臺北小巨蛋",
                "address": "臺北市松山區南京東路四段2號",
                "signup_start": now - timedelta(days=3),
                "signup_end": now + timedelta(days=14),
                "game_start": now + timedelta(days=30),
                "game_end": now + timedelta(days=32),
                "categories": ["男子公開組", "女子公開組"],
                "fee": Decimal("3000"),
            },
            {
                "name": "高雄市夏季排球邀請賽",
                "region": "kaohsiung",
                "venue": "高雄巨蛋",
                "address": "高雄市左營區博愛二路757號",
                "signup_start": now + timedelta(days=10),
                "signup_end": now + timedelta(days=40),
                "game_start": now + timedelta(days=60),
                "game_end": now + timedelta(days=61),
                "categories": ["社會組"],
                "fee": Decimal("2000"),
            },
        ]

        for data in games_data:
            categories = data.pop("categories")
            amount = data.pop("fee")
            game, created = Game.objects.get_or_create(name=data["name"], defaults=data)
            if not created:
                self.stdout.write(f"  Game already exists: {game.name}")
                continue

            GameDetail.objects.create(game=game, basis="依中華民國籃球協會最新規則", note="請於賽前30分鐘報到")
            for category_name in categories:
                category = GameCategory.objects.create(game=game, category_name=category_name)
                GameFee.objects.create(game=game, category=category, fee_type="報名費", amount=amount)
            GameFee.objects.create(game=game, fee_type="保證金", amount=Decimal("1000"), is_required=False)
            self.stdout.write(f"  Created game: {game.name}")

        # 3. Team with roster, plus personal players
        team, created = Team.objects.get_or_create(name="台北猛虎", defaults={"user": coach})
        if created:
            for index, (name, gender) in enumerate([("王小明", "M"), ("李大華", "M"), ("林美玲", "F")]):
                TeamMember.objects.create(
                    team=team,
                    name=name,
                    gender=gender,
                    birthday=date(1995 + index, 3, 15),
                    role="隊長" if index == 0 else "選手",
                )
            TeamStaff.objects.create(team=team, role=TeamStaff.ROLE_COACH, name=coach.name)
            TeamStaff.objects.create(team=team, role=TeamStaff.ROLE_LEADER, name="張領隊")

        for name, gender in [("周杰", "M"), ("蔡依", "F")]:
            UserPlayer.objects.get_or_create(
                user=coach,
                name=name,
                defaults={"gender": gender, "birthday": date(2000, 1, 1)},
            )

        self.stdout.write(self.style.SUCCESS("✅ Seeding complete"))
