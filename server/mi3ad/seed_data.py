"""Catalog and starter content loaded into a fresh database."""

from datetime import date

EVENTS = [
    {
        "id": "1",
        "title": "Government Digital Transformation Conference",
        "title_ar": "مؤتمر التحول الرقمي الحكومي",
        "description": "Learn about the latest government digital initiatives and transformation strategies.",
        "description_ar": "تعرف على أحدث المبادرات الحكومية للتحول الرقمي واستراتيجيات التطوير.",
        "category": "government",
        "date": date(2024, 2, 15),
        "time": "09:00",
        "location": "Tripoli Convention Center",
        "location_ar": "مركز طرابلس للمؤتمرات",
        "price": 0,
        "image": "https://images.pexels.com/photos/3184435/pexels-photo-3184435.jpeg",
        "organizer": "Ministry of Digital Transformation",
        "organizer_ar": "وزارة التحول الرقمي",
        "is_featured": True,
        "latitude": 32.8872,
        "longitude": 13.1913,
        "max_attendees": 500,
        "current_attendees": 245,
    },
    {
        "id": "2",
        "title": "International School Fair",
        "title_ar": "معرض المدارس الدولية",
        "description": "Discover the best international schools in Libya and their programs.",
        "description_ar": "اكتشف أفضل المدارس الدولية في ليبيا وبرامجها التعليمية.",
        "category": "schools",
        "date": date(2024, 2, 20),
        "time": "10:00",
        "location": "Benghazi Educational Complex",
        "location_ar": "مجمع بنغازي التعليمي",
        "price": 5,
        "image": "https://images.pexels.com/photos/289737/pexels-photo-289737.jpeg",
        "organizer": "Libya Education Council",
        "organizer_ar": "مجلس التعليم الليبي",
        "is_featured": True,
        "latitude": 32.1244,
        "longitude": 20.0707,
        "max_attendees": 300,
        "current_attendees": 156,
    },
    {
        "id": "3",
        "title": "Health & Wellness Expo",
        "title_ar": "معرض الصحة والعافية",
        "description": "Latest medical technologies and wellness solutions for a healthier Libya.",
        "description_ar": "أحدث التقنيات الطبية وحلول العافية من أجل ليبيا أكثر صحة.",
        "category": "clinics",
        "date": date(2024, 2, 25),
        "time": "08:30",
        "location": "Tripoli Medical Center",
        "location_ar": "المركز الطبي طرابلس",
        "price": 10,
        "image": "https://images.pexels.com/photos/40568/medical-appointment-doctor-healthcare-40568.jpeg",
        "organizer": "Libya Health Association",
        "organizer_ar": "جمعية الصحة الليبية",
        "is_featured": False,
        "latitude": 32.8925,
        "longitude": 13.1802,
        "max_attendees": 200,
        "current_attendees": 89,
    },
    {
        "id": "4",
        "title": "Traditional Wedding Celebration",
        "title_ar": "احتفال الزفاف التقليدي",
        "description": "Experience authentic Libyan wedding traditions and celebrations.",
        "description_ar": "اختبر تقاليد الزفاف الليبية الأصيلة والاحتفالات التراثية.",
        "category": "occasions",
        "date": date(2024, 3, 1),
        "time": "18:00",
        "location": "Al-Saraya Al-Hamra",
        "location_ar": "السرايا الحمراء",
        "price": 25,
        "image": "https://images.pexels.com/photos/1444442/pexels-photo-1444442.jpeg",
        "organizer": "Cultural Heritage Society",
        "organizer_ar": "جمعية التراث الثقافي",
        "is_featured": True,
        "latitude": 32.8925,
        "longitude": 13.1802,
        "max_attendees": 150,
        "current_attendees": 127,
    },
    {
        "id": "5",
        "title": "Comedy Night Show",
        "title_ar": "عرض الكوميديا الليلي",
        "description": "Laugh the night away with Libya's top comedians.",
        "description_ar": "استمتع بليلة من الضحك مع أفضل الكوميديين في ليبيا.",
        "category": "entertainment",
        "date": date(2024, 3, 5),
        "time": "20:00",
        "location": "Tripoli Theatre",
        "location_ar": "مسرح طرابلس",
        "price": 15,
        "image": "https://images.pexels.com/photos/713149/pexels-photo-713149.jpeg",
        "organizer": "Entertainment Libya",
        "organizer_ar": "ترفيه ليبيا",
        "is_featured": False,
        "latitude": 32.8872,
        "longitude": 13.1913,
        "max_attendees": 400,
        "current_attendees": 298,
    },
    {
        "id": "6",
        "title": "New Shopping Mall Opening",
        "title_ar": "افتتاح المركز التجاري الجديد",
        "description": "Grand opening of Libya's newest and largest shopping destination.",
        "description_ar": "الافتتاح الكبير لأحدث وأكبر وجهة تسوق في ليبيا.",
        "category": "openings",
        "date": date(2024, 3, 10),
        "time": "11:00",
        "location": "New Tripoli Mall",
        "location_ar": "مول طرابلس الجديد",
        "price": 0,
        "image": "https://images.pexels.com/photos/264507/pexels-photo-264507.jpeg",
        "organizer": "Libya Commercial Group",
        "organizer_ar": "المجموعة التجارية الليبية",
        "is_featured": True,
        "latitude": 32.8925,
        "longitude": 13.1802,
        "max_attendees": 1000,
        "current_attendees": 756,
    },
]

SCHOOLS = [
    {
        "id": "1",
        "name": "International School of Tripoli",
        "name_ar": "المدرسة الدولية طرابلس",
        "description": "Leading international education in Libya with modern facilities and qualified teachers.",
        "description_ar": "رائدة في التعليم الدولي في ليبيا مع مرافق حديثة ومعلمين مؤهلين.",
        "image": "https://images.pexels.com/photos/289737/pexels-photo-289737.jpeg",
        "location": "Tripoli, Libya",
        "location_ar": "طرابلس، ليبيا",
        "phone": "+218-21-123-4567",
        "email": "info@ist.ly",
        "website": "www.ist.ly",
        "admin_ids": ["admin1", "admin2"],
        "is_online": True,
        "response_time": "Usually responds within 30 minutes",
    },
    {
        "id": "2",
        "name": "Benghazi American School",
        "name_ar": "المدرسة الأمريكية بنغازي",
        "description": "American curriculum school providing quality education since 1995.",
        "description_ar": "مدرسة منهج أمريكي تقدم تعليماً عالي الجودة منذ 1995.",
        "image": "https://images.pexels.com/photos/207692/pexels-photo-207692.jpeg",
        "location": "Benghazi, Libya",
        "location_ar": "بنغازي، ليبيا",
        "phone": "+218-61-987-6543",
        "email": "contact@bas.ly",
        "website": None,
        "admin_ids": ["admin3"],
        "is_online": False,
        "response_time": "Usually responds within 2 hours",
    },
    {
        "id": "3",
        "name": "Libya International Academy",
        "name_ar": "أكاديمية ليبيا الدولية",
        "description": "Bilingual education with focus on science and technology.",
        "description_ar": "تعليم ثنائي اللغة مع التركيز على العلوم والتكنولوجيا.",
        "image": "https://images.pexels.com/photos/1454360/pexels-photo-1454360.jpeg",
        "location": "Misrata, Libya",
        "location_ar": "مصراتة، ليبيا",
        "phone": "+218-51-555-0123",
        "email": "info@lia.ly",
        "website": None,
        "admin_ids": ["admin4", "admin5"],
        "is_online": True,
        "response_time": "Usually responds within 1 hour",
    },
    {
        "id": "4",
        "name": "Green Mountain School",
        "name_ar": "مدرسة الجبل الأخضر",
        "description": "Environmental-focused education in the heart of Cyrenaica.",
        "description_ar": "تعليم يركز على البيئة في قلب برقة.",
        "image": "https://images.pexels.com/photos/159844/cellular-education-classroom-159844.jpeg",
        "location": "Al Bayda, Libya",
        "location_ar": "البيضاء، ليبيا",
        "phone": "+218-84-222-3333",
        "email": "contact@gms.ly",
        "website": None,
        "admin_ids": ["admin6"],
        "is_online": True,
        "response_time": "Usually responds within 45 minutes",
    },
]

# Offsets are hours before the account was created
STARTER_NOTIFICATIONS = [
    {
        "hours_ago": 1,
        "type": "event_reminder",
        "title": "تذكير بالفعالية",
        "message": "مؤتمر التحول الرقمي الحكومي يبدأ خلال ساعة",
        "is_read": False,
        "action_url": "/event/1",
        "image_url": "https://images.pexels.com/photos/3184435/pexels-photo-3184435.jpeg",
    },
    {
        "hours_ago": 2,
        "type": "message",
        "title": "رسالة جديدة",
        "message": "أحمد محمد أرسل لك رسالة",
        "is_read": False,
        "action_url": "/chat",
        "from_user": {
            "id": "1",
            "name": "أحمد محمد",
            "avatar": "https://images.pexels.com/photos/220453/pexels-photo-220453.jpeg",
        },
    },
    {
        "hours_ago": 4,
        "type": "like",
        "title": "إعجاب جديد",
        "message": "فاطمة علي أعجبت بمنشورك",
        "is_read": True,
        "from_user": {
            "id": "2",
            "name": "فاطمة علي",
            "avatar": "https://images.pexels.com/photos/415829/pexels-photo-415829.jpeg",
        },
    },
    {
        "hours_ago": 6,
        "type": "booking_confirmed",
        "title": "تأكيد الحجز",
        "message": "تم تأكيد حجزك لفعالية معرض المدارس الدولية",
        "is_read": False,
        "action_url": "/bookings",
        "image_url": "https://images.pexels.com/photos/289737/pexels-photo-289737.jpeg",
    },
    {
        "hours_ago": 24,
        "type": "system",
        "title": "تحديث التطبيق",
        "message": "إصدار جديد من التطبيق متاح الآن",
        "is_read": True,
        "action_url": "/settings",
    },
]

SIMULATED_NOTIFICATIONS = [
    {
        "type": "message",
        "title": "رسالة جديدة",
        "message": "لديك رسالة جديدة من صديق",
        "action_url": "/chat",
    },
    {
        "type": "like",
        "title": "إعجاب جديد",
        "message": "أعجب شخص ما بمنشورك",
    },
]

SCHOOL_RESPONSES = [
    "شكراً لتواصلك معنا. سنقوم بالرد عليك في أقرب وقت ممكن.",
    "تم استلام رسالتك. هل يمكنك تقديم المزيد من التفاصيل؟",
    "نحن هنا لمساعدتك. ما هو السؤال المحدد الذي تريد الاستفسار عنه؟",
    "مرحباً! كيف يمكن لفريق الإدارة مساعدتك؟",
    "شكراً لاهتمامك بمدرستنا. سنتواصل معك قريباً.",
]

WELCOME_TEMPLATE = "مرحباً بك في {name_ar}! كيف يمكننا مساعدتك اليوم؟"

DEMO_PROFILE = {
    "name": "محمد أحمد",
    "email": "mohamed@example.com",
    "bio": "مطور تطبيقات ومهتم بالتكنولوجيا",
    "avatar": "",
}
