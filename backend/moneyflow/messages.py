"""
User-facing display strings (Khmer). Kept in one module so handlers only format, never compose copy.
Templates use str.format placeholders.
"""
from moneyflow.models.types import HealthLevel, Recommendation, Strength, Tier

# Multi-part marker for long replies split by message_splitter
PART_MARKER = "📝 {prefix} {index}/{total}\n\n"

# --- Quiz ---

QUIZ_TITLE = "🎯 ការពិនិត្យសុខភាពហិរញ្ញវត្ថុដោយឥតគិតថ្លៃ"
QUIZ_SUBTITLE = "ស្វែងយល់ពីស្ថានភាពហិរញ្ញវត្ថុរបស់អ្នកក្នុង ២ នាទី"

QUIZ_INTRO = f"""{QUIZ_TITLE}

{QUIZ_SUBTITLE}

✅ បញ្ចប់ហើយអ្នកនឹងទទួលបាន:
• ពិន្ទុសុខភាពហិរញ្ញវត្ថុ /១០០
• ការវិភាគផ្ទាល់ខ្លួន
• គន្លឹះកែលម្អ ៣ យ៉ាង
• ផែនការសកម្មភាពឥតគិតថ្លៃ

🚀 តោះចាប់ផ្តើម!

សរសេរ "READY" ដើម្បីចាប់ផ្តើម Quiz"""

QUIZ_READY_REMINDER = 'សរសេរ "READY" ដើម្បីចាប់ផ្តើម Quiz'

QUIZ_QUESTION = """📝 សំណួរទី {number}/{total}:

{prompt}

{options}

សរសេរលេខចម្លើយរបស់អ្នក (1-{count}):"""

QUIZ_OPTION_LINE = "{index}. {label}"

QUIZ_INVALID_ANSWER = "សូមបញ្ចូលលេខចម្លើយត្រឹមត្រូវ (1-{count})។"

HEALTH_LABELS = {
    HealthLevel.BEST: ("🟢", "ល្អបំផុត"),
    HealthLevel.GOOD: ("🟡", "ល្អ"),
    HealthLevel.NEEDS_IMPROVEMENT: ("🟠", "ត្រូវកែលម្អ"),
    HealthLevel.NEEDS_DEVELOPMENT: ("🔴", "ត្រូវការអភិវឌ្ឍន៍"),
}

STRENGTH_LABELS = {
    Strength.SAVINGS_RATE: "💪 អត្រាសន្សំល្អ",
    Strength.EMERGENCY_FUND: "🛡️ Emergency Fund គ្រប់គ្រាន់",
    Strength.DEBT_FREE: "✅ គ្មានបំណុល",
    Strength.POSITIVE_CASH_FLOW: "📈 ចំណូលលើសចំណាយ",
}

RECOMMENDATION_LABELS = {
    Recommendation.RAISE_SAVINGS_RATE: "🎯 បង្កើនអត្រាសន្សំដល់ ២០% នៃចំណូល",
    Recommendation.BUILD_EMERGENCY_FUND: "🚨 បង្កើត Emergency Fund ${target}",
    Recommendation.DEBT_PLAN: "💳 ធ្វើផែនការសងបំណុល",
    Recommendation.IMPROVE_INCOME: "⚡ ត្រូវការផែនការកែលម្អចំណូល",
    Recommendation.FOCUS_EMERGENCY: "💡 ផ្តោតលើការបង្កើតមូលនិធិបន្ទាន់",
    Recommendation.FOCUS_DEBT: "💡 ផ្តោតលើការសងបំណុលជាអាទិភាព",
    Recommendation.FOCUS_SAVING: "💡 ផ្តោតលើការបង្កើនការសន្សំប្រចាំខែ",
    Recommendation.EMERGENCY_BEFORE_INVEST: "💡 មុនវិនិយោគ សូមបង្កើតមូលនិធិបន្ទាន់សិន",
}

QUIZ_STRENGTHS_BLOCK = "💪 ចំណុចខ្លាំង:\n{lines}\n"
QUIZ_NO_RECOMMENDATIONS = "✅ អ្នកកំពុងធ្វើបានល្អ!"

QUIZ_RESULT = """📊 លទ្ធផល Financial Health Check របស់អ្នក:

{emoji} ពិន្ទុ: {score}/100 ({label})

📈 ការវិភាគលម្អិត:
💰 អត្រាសន្សំ: {savings_rate:.1f}%
🚨 Emergency Fund ត្រូវការ: ${emergency_target:.0f}
💳 Debt-to-Income Ratio: {debt_ratio:.1f}%

{strengths}
🎯 ការណែនាំចម្បង:
{recommendations}

🚀 ជំហានបន្ទាប់:
• ប្រើឧបករណ៍ឥតគិតថ្លៃ: /calculate_daily
• រកកន្លែងលុយលេច: /find_leaks
• មើលកម្មវិធីពេញលេញ: /pricing

💡 ចង់ដឹងកម្មវិធីអាចជួយអ្នកយ៉ាងម៉េច? ប្រើ /preview"""

QUIZ_FOLLOW_UP = """🎁 រឿងពិសេសសម្រាប់អ្នក:

អ្នកបានបញ្ចប់ Quiz រួចហើយ! នេះបង្ហាញថាអ្នកពិតជាចង់កែលម្អហិរញ្ញវត្ថុ។

🔥 កម្មវិធី 7-Day Money Flow Reset™ អាចជួយអ្នក:
✅ កែលម្អពិន្ទុ Financial Health ដល់ ៨០+
✅ បង្កើនអត្រាសន្សំ ២-៣ ដង
✅ សន្សំបាន $300-800 ក្នុង ៣០ ថ្ងៃ
✅ ទទួលបានផែនការជាក់ស្តែង

🚨 LAUNCH SPECIAL: តែ $24 (ធម្មតា $47)
💰 អ្នកសន្សំបាន: $23 (៥០% OFF!)
⏰ តែ ២០០ កន្លែងដំបូងប៉ុណ្ណោះ!

ចង់ដឹងបន្ថែម? ប្រើ /pricing ឬ /preview"""

# --- Access control ---

ACCESS_NOT_REGISTERED = "🔒 សូមចុះឈ្មោះជាមុនសិន។ ប្រើ /start ដើម្បីចាប់ផ្តើម។"
ACCESS_NOT_PAID = "🔒 សូមទូទាត់មុនដើម្បីចូលរួមកម្មវិធី។ ប្រើ /pricing ដើម្បីមើលព័ត៌មាន។"
ACCESS_UPGRADE_REQUIRED = "{badge} មុខងារនេះត្រូវការកម្រិតខ្ពស់ជាង។ ប្រើ /pricing ដើម្បីមើលការ upgrade។"
ACCESS_ERROR = "❌ មានបញ្ហា។ សូមសាកល្បងម្តងទៀត។"

TIER_SUPPORT = {
    Tier.FREE: "🔓 សូមទូទាត់ដើម្បីទទួលបានការជំនួយពេញលេញ។",
    Tier.ESSENTIAL: "🎯 ប្រើ /help សម្រាប់ការជំនួយ ឬសរសេរសំណួរមកដោយផ្ទាល់។",
    Tier.PREMIUM: "🚀 អ្នកទទួលបានការជំនួយពិសេស! ប្រើ /admin_contact ដើម្បីទាក់ទងអ្នកគ្រប់គ្រង។",
    Tier.VIP: "👑 អ្នកទទួលបានការបម្រើពិសេស! ប្រើ /book_session ដើម្បីកក់ពេលជួប 1-on-1។",
}

# --- Help ---

PRICING_PAID = "មើលតម្លៃ ($47 / $97 / $197)"
PRICING_UNPAID = "មើលតម្លៃ ($47)"

HELP_BASE_COMMANDS = """
🎯 ពាក្យបញ្ជាទូទៅ
/start - ចាប់ផ្តើមកម្មវិធី
/pricing - {pricing}
/payment - ការណែនាំទូទាត់
/help - ជំនួយនេះ
/whoami - មើលព័ត៌មានគណនី"""

HELP_FOOTER = """

🛠 ជំនួយបន្ថែម
មានសំណួរអ្វី? អ្នកអាចសរសេរសារមក ខ្ញុំ"""

HELP_FREE = """{badge} កម្មវិធីផ្លាស់ប្ដូរ 7-Day Money Flow Reset™{base}

🎯 ការពិនិត្យសុខភាពហិរញ្ញវត្ថុ (ឥតគិតថ្លៃ)
/financial_quiz - ពិនិត្យសុខភាពហិរញ្ញវត្ថុ ២ នាទី
/health_check - ការវាយតម្លៃហិរញ្ញវត្ថុ

🎬 ការមើលជាមុនកម្មវិធី (ឥតគិតថ្លៃ)
/preview - ការមើលជាមុនទាំងអស់
/preview_day1 - សាកល្បងមេរៀនទី១
/preview_results - លទ្ធផលអ្នកប្រើពិតប្រាកដ
/preview_journey - ៧ ថ្ងៃពេញលេញ

💰 ឧបករណ៍គណនាឥតគិតថ្លៃ
/calculate_daily - គណនាចំណាយប្រចាំថ្ងៃ
/find_leaks - រកកន្លែងលុយលេច
/savings_potential - គណនាសក្តានុពលសន្សំ
/income_analysis - វិភាគចំណូល

🔒 ចង់ចូលរៀន? ប្រើ /pricing ដើម្បីមើលកម្មវិធី"""

HELP_PAID_COMMANDS = """
🎯 ពាក្យបញ្ជាមេរៀន
/day1 - ថ្ងៃទី១: Money Flow Basics
/day2 - ថ្ងៃទី២: Money Leaks
/day3 - ថ្ងៃទី៣: System Evaluation
/day4 - ថ្ងៃទី៤: Income/Cost Mapping
/day5 - ថ្ងៃទី៥: Survival vs Growth
/day6 - ថ្ងៃទី៦: Action Planning
/day7 - ថ្ងៃទី៧: Integration

📈 កម្មវិធីបន្ថែម (30 ថ្ងៃ)
/30day - ទិដ្ឋភាពទូទៅកម្មវិធី 30 ថ្ងៃ
/30day_calendar - ប្រតិទិនពេញលេញ 30 ថ្ងៃ
/extended8 - ថ្ងៃទី៨: ការវិភាគចំណូលកម្រិតខ្ពស់
/extended9 - ថ្ងៃទី៩: ការគ្រប់គ្រងចំណាយអាជីវកម្ម
/extended10 - ថ្ងៃទី១០: ការបង្កើតទម្លាប់ហិរញ្ញវត្ថុ
... និងច្រើនទៀតរហូតដល់ /extended30

🏆 ការតាមដាន
/badges - មើលការរីកចម្រើន
/progress - ការរីកចម្រើនពេញលេញ
/milestones - សមិទ្ធផលទាំងអស់
/streak - មើលការធ្វើបន្តបន្ទាប់

📚 សម្រង់ប្រាជ្ញាខ្មែរ
/quote - សម្រង់ប្រាជ្ញាប្រចាំថ្ងៃ
/wisdom - សម្រង់ចៃដន្យ
/quote_categories - ប្រភេទសម្រង់ទាំងអស់"""

HELP_PREMIUM_COMMANDS = """
🚀 មុខងារ Premium
/admin_contact - ទាក់ទងអ្នកគ្រប់គ្រង
/priority_support - ការជំនួយពិសេស
/advanced_analytics - ទិន្នន័យលម្អិត"""

HELP_VIP_COMMANDS = """
👑 មុខងារ VIP
/book_session - កក់ពេលជួប 1-on-1
/capital_clarity - Capital Clarity Sessions
/vip_reports - របាយការណ៍ផ្ទាល់ខ្លួន
/extended_tracking - ការតាមដាន 30 ថ្ងៃ"""

HELP_PAID = """{badge} កម្មវិធីផ្លាស់ប្ដូរ 7-Day Money Flow Reset™
កម្រិតបច្ចុប្បន្ន: {tier_name}{base}{paid}{specific}"""

HELP_FALLBACK = """❌ មានបញ្ហាក្នុងការផ្ទុកជំនួយ។ សូមសាកល្បងម្តងទៀត។

🎯 ពាក្យបញ្ជាមូលដ្ឋាន
/start - ចាប់ផ្តើមកម្មវិធី
/pricing - មើលតម្លៃ
/help - ជំនួយនេះ""" + HELP_FOOTER

# --- Commands ---

WELCOME = """👋 សូមស្វាគមន៍មកកាន់កម្មវិធី 7-Day Money Flow Reset™!

🎯 ចាប់ផ្តើមជាមួយការពិនិត្យសុខភាពហិរញ្ញវត្ថុឥតគិតថ្លៃ: /financial_quiz
📋 មើលពាក្យបញ្ជាទាំងអស់: /help"""

WHOAMI = """{badge} កម្រិត: {tier_name}
💳 ស្ថានភាពទូទាត់: {status}{price}"""
WHOAMI_PAID = "បានទូទាត់"
WHOAMI_UNPAID = "មិនទាន់ទូទាត់"
WHOAMI_PRICE = "\n💰 តម្លៃ: ${price}"

FEATURE_GRANTED = "{badge} {feature}: ✅ អ្នកមានសិទ្ធិប្រើមុខងារនេះ។\n{support}"
