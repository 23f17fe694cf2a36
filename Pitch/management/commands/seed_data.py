from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from Content.models import Review
from Content.services import initials
from Pitch.models import Pitch

User = get_user_model()

DEFAULT_PITCHES = [
    {
        "name": "Sân 5 người - Trong nhà",
        "image": "/field-indoor.jpg",
        "price_value": 300000,
        "location": "Quận 1, TP.HCM",
        "capacity": 10,
        "type": Pitch.FIVE_A_SIDE,
        "description": "Sân 5 người trong nhà, có mái che, điều hòa, phù hợp cho mọi thời tiết.",
    },
    {
        "name": "Sân 7 người - Ngoài trời",
        "image": "/field-outdoor.jpg",
        "price_value": 500000,
        "location": "Quận 2, TP.HCM",
        "capacity": 14,
        "type": Pitch.SEVEN_A_SIDE,
        "description": "Sân cỏ tự nhiên ngoài trời, không gian thoáng đãng, view đẹp.",
    },
    {
        "name": "Sân 11 người - Premium",
        "image": "/field-premium.jpg",
        "price_value": 1200000,
        "location": "Quận 7, TP.HCM",
        "capacity": 22,
        "type": Pitch.ELEVEN_A_SIDE,
        "description": "Sân cỏ tiêu chuẩn quốc tế, hệ thống chiếu sáng hiện đại, phòng thay đồ cao cấp.",
    },
]

SAMPLE_REVIEWS = [
    ("Nguyễn Văn A", 5, "Sân bóng rất đẹp, sạch sẽ. Nhân viên phục vụ nhiệt tình. Sẽ quay lại đặt tiếp!", 0),
    ("Trần Thị B", 5, "Đặt sân rất dễ dàng, thanh toán nhanh chóng. Sân chất lượng tốt, giá cả hợp lý.", 1),
    ("Lê Văn C", 4, "Giao diện website dễ sử dụng, xem lịch trống rất tiện. Sân đẹp, đèn sáng tốt.", 2),
    ("Phạm Thị D", 5, "Dịch vụ tuyệt vời! Đặt sân online rất tiện, không cần gọi điện. Sẽ giới thiệu cho bạn bè.", 0),
    ("Hoàng Văn E", 5, "Sân cỏ nhân tạo mới, đẹp. Giá cả phải chăng. Hệ thống đặt sân online rất chuyên nghiệp.", 1),
    ("Võ Thị F", 4, "Đặt sân nhanh chóng, thanh toán dễ dàng. Sân sạch sẽ, có chỗ để xe rộng rãi.", 2),
]


class Command(BaseCommand):
    help = "Create the default admin account, the three starter pitches and sample reviews."

    def add_arguments(self, parser):
        parser.add_argument("--admin-email", default="admin@admin.com")
        parser.add_argument("--admin-password", default="admin123")

    @transaction.atomic
    def handle(self, *args, **options):
        email = options["admin_email"].strip().lower()

        if User.objects.filter(email=email).exists():
            self.stdout.write(f"Admin {email} already exists")
        else:
            User.objects.create_superuser(
                email=email,
                password=options["admin_password"],
                name="Administrator",
            )
            self.stdout.write(self.style.SUCCESS(f"Created admin {email}"))

        pitches = []
        for data in DEFAULT_PITCHES:
            defaults = dict(data, status=Pitch.ACTIVE)
            name = defaults.pop("name")
            pitch, created = Pitch.objects.get_or_create(name=name, defaults=defaults)
            pitches.append(pitch)
            if created:
                self.stdout.write(self.style.SUCCESS(f"Created pitch {pitch.name}"))

        if Review.objects.exists():
            self.stdout.write("Reviews already seeded")
            return

        for name, rating, comment, pitch_idx in SAMPLE_REVIEWS:
            pitch = pitches[pitch_idx]
            Review.objects.create(
                name=name,
                avatar=initials(name),
                rating=rating,
                comment=comment,
                pitch=pitch,
                field=pitch.name,
            )
        self.stdout.write(self.style.SUCCESS(f"Created {len(SAMPLE_REVIEWS)} reviews"))
