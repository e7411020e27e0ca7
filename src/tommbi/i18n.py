"""English/Persian UI text.

Every user-visible label goes through `t(key, language)`; aggregates never
depend on the language.
"""

from __future__ import annotations

from tommbi.core.state import Language, Page

TEXT: dict[str, dict[str, str]] = {
    # Navigation / chrome
    "app.brand": {"en": "TOMM", "fa": "TOMM"},
    "app.user": {"en": "Admin", "fa": "مدیر سیستم"},
    "app.switch_language": {"en": "فارسی", "fa": "English"},
    "app.copyright": {"en": "© 2024 TOMM", "fa": "© 2024 TOMM"},
    "app.back": {"en": "Back", "fa": "بازگشت"},
    "filter.label": {"en": "Filter by Factory:", "fa": "فیلتر کارخانه:"},
    # Menu labels
    "menu.executive": {"en": "Executive Dashboard", "fa": "داشبورد مدیریتی"},
    "menu.production": {"en": "Production", "fa": "تولید"},
    "menu.finance": {"en": "Finance", "fa": "مالی"},
    "menu.maintenance": {"en": "Maintenance", "fa": "نگهداری و تعمیرات"},
    "menu.energy": {"en": "Energy", "fa": "انرژی"},
    "menu.quality": {"en": "Quality Control", "fa": "کنترل کیفیت"},
    "menu.hr": {"en": "Human Resources", "fa": "منابع انسانی"},
    "menu.supply_chain": {"en": "Supply Chain", "fa": "زنجیره تأمین"},
    "menu.sales": {"en": "Sales", "fa": "فروش"},
    "menu.ai_predictive": {"en": "AI & Predictive", "fa": "هوش مصنوعی"},
    "menu.privacy": {"en": "Privacy", "fa": "حریم خصوصی"},
    # Page titles / subtitles
    "title.executive": {"en": "Executive Dashboard", "fa": "داشبورد مدیریتی"},
    "subtitle.executive": {"en": "Overall company performance snapshot", "fa": "خلاصه عملکرد کل شرکت"},
    "title.production": {"en": "Production Dashboard", "fa": "داشبورد تولید"},
    "subtitle.production": {"en": "Analysis of production performance and efficiency", "fa": "تحلیل عملکرد تولید و راندمان"},
    "title.finance": {"en": "Finance & Cost Dashboard", "fa": "داشبورد مالی و حسابداری"},
    "subtitle.finance": {"en": "Analysis of costs, profitability, and financial performance", "fa": "تحلیل بهای تمام‌شده، سودآوری و عملکرد مالی"},
    "title.maintenance": {"en": "Maintenance & Reliability", "fa": "داشبورد نگهداری و تعمیرات"},
    "subtitle.maintenance": {"en": "Downtime analysis and reliability metrics", "fa": "تحلیل توقفات و شاخص‌های قابلیت اطمینان"},
    "title.energy": {"en": "Energy & Environment", "fa": "داشبورد انرژی و محیط زیست"},
    "subtitle.energy": {"en": "Analysis of energy consumption, costs, and emissions", "fa": "تحلیل مصرف انرژی، هزینه‌ها و انتشار آلاینده‌ها"},
    "title.quality": {"en": "Quality Control Dashboard", "fa": "داشبورد کنترل کیفیت"},
    "subtitle.quality": {"en": "Product and process quality metrics", "fa": "شاخص‌های کیفیت محصول و فرآیند"},
    "title.hr": {"en": "Human Resources Dashboard", "fa": "داشبورد منابع انسانی"},
    "subtitle.hr": {"en": "Workforce analysis and HR metrics", "fa": "تحلیل نیروی کار و شاخص‌های منابع انسانی"},
    "title.supply_chain": {"en": "Supply Chain Dashboard", "fa": "داشبورد زنجیره تأمین"},
    "subtitle.supply_chain": {"en": "Inventory, supplier, and logistics management", "fa": "مدیریت موجودی، تأمین‌کنندگان و لجستیک"},
    "title.sales": {"en": "Sales Dashboard", "fa": "داشبورد فروش"},
    "subtitle.sales": {"en": "Sales performance and customer analysis", "fa": "تحلیل عملکرد فروش و مشتریان"},
    "title.ai_predictive": {"en": "AI & Predictive Dashboard", "fa": "داشبورد هوش مصنوعی و پیش‌بینی"},
    "subtitle.ai_predictive": {"en": "Demand forecasting, failure prediction, and optimization", "fa": "پیش‌بینی تقاضا، خرابی‌ها و بهینه‌سازی"},
    "title.privacy": {"en": "Privacy Policy", "fa": "سیاست حفظ حریم خصوصی"},
    "subtitle.privacy": {"en": "Our commitment to protecting your data", "fa": "تعهد ما به حفاظت از داده‌های شما"},
    # KPI titles
    "kpi.total_production": {"en": "Total Production (Tons)", "fa": "کل تولید (تن)"},
    "kpi.total_revenue": {"en": "Total Revenue", "fa": "درآمد کل"},
    "kpi.net_profit": {"en": "Net Profit", "fa": "سود خالص"},
    "kpi.overall_oee": {"en": "Overall OEE", "fa": "راندمان کلی (OEE)"},
    "kpi.plan_attainment": {"en": "Plan Attainment", "fa": "تحقق برنامه"},
    "kpi.downtime_hours": {"en": "Downtime (hrs)", "fa": "توقفات (ساعت)"},
    "kpi.waste": {"en": "Waste (Tons)", "fa": "ضایعات (تن)"},
    "kpi.cost_of_goods": {"en": "Cost of Goods", "fa": "بهای تمام‌شده کالا"},
    "kpi.gross_margin": {"en": "Gross Margin", "fa": "حاشیه سود ناخالص"},
    "kpi.total_downtime": {"en": "Total Downtime (hrs)", "fa": "کل توقفات (ساعت)"},
    "kpi.emergency_stops": {"en": "Emergency Stops", "fa": "توقفات اضطراری"},
    "kpi.maintenance_cost": {"en": "Maintenance Cost", "fa": "هزینه تعمیرات"},
    "kpi.mtbf": {"en": "MTBF (hrs)", "fa": "شاخص MTBF (ساعت)"},
    "kpi.total_energy": {"en": "Total Energy Use (MWh)", "fa": "کل مصرف انرژی (MWh)"},
    "kpi.energy_intensity": {"en": "Energy Intensity (kWh/ton)", "fa": "شدت انرژی (kWh/ton)"},
    "kpi.energy_cost": {"en": "Energy Cost", "fa": "هزینه انرژی"},
    "kpi.co2": {"en": "CO₂ Emissions (Est.)", "fa": "انتشار CO₂ (تخمین)"},
    "kpi.rejection_rate": {"en": "Rejection Rate", "fa": "نرخ مردودی"},
    "kpi.cpk": {"en": "Cpk Index", "fa": "شاخص Cpk"},
    "kpi.lab_turnaround": {"en": "Lab Turnaround", "fa": "زمان پاسخ آزمایشگاه"},
    "kpi.rejection_stdev": {"en": "Standard Deviation", "fa": "انحراف از استاندارد"},
    "kpi.total_employees": {"en": "Total Employees", "fa": "تعداد کل پرسنل"},
    "kpi.absenteeism": {"en": "Absenteeism Rate", "fa": "نرخ غیبت"},
    "kpi.safety_incidents": {"en": "Safety Incidents", "fa": "حوادث کاری"},
    "kpi.productivity": {"en": "Productivity (Ton/Emp)", "fa": "بهره‌وری (تولید/نفر)"},
    "kpi.raw_inventory": {"en": "Raw Material Inv. (Tons)", "fa": "موجودی مواد اولیه (تن)"},
    "kpi.finished_inventory": {"en": "Finished Goods Inv. (Tons)", "fa": "موجودی محصول نهایی (تن)"},
    "kpi.on_time_delivery": {"en": "On-Time Delivery", "fa": "نرخ تحویل به‌موقع"},
    "kpi.transport_cost": {"en": "Transport Cost", "fa": "هزینه حمل و نقل"},
    "kpi.total_sales": {"en": "Total Sales", "fa": "فروش کل"},
    "kpi.units_sold": {"en": "Units Sold", "fa": "واحدهای فروخته‌شده"},
    "kpi.profit_per_customer": {"en": "Avg. Profit/Customer", "fa": "میانگین سود هر مشتری"},
    "kpi.export_share": {"en": "Export Sales Rate", "fa": "نرخ فروش صادراتی"},
    # KPI notes
    "note.vs_last_month": {"en": "vs. last month", "fa": "نسبت به ماه قبل"},
    "note.emissions": {"en": "emissions vs. last month", "fa": "انتشار نسبت به ماه قبل"},
    "note.process_stability": {"en": "process stability", "fa": "پایداری فرآیند"},
    "note.annual_growth": {"en": "headcount trend", "fa": "روند تعداد پرسنل"},
    "note.tons_per_employee": {"en": "tons per employee", "fa": "تن به ازای هر نفر"},
    "note.monthly_consumption": {"en": "monthly consumption", "fa": "مصرف ماهانه"},
    "note.supplier_performance": {"en": "supplier performance", "fa": "عملکرد تأمین‌کنندگان"},
    "note.new_markets": {"en": "growth in new markets", "fa": "رشد در بازارهای جدید"},
    # Chart titles
    "chart.production_by_factory": {"en": "Production by Factory", "fa": "مقایسه تولید کارخانه‌ها"},
    "chart.revenue_profit_trend": {"en": "Revenue & Profit Trend", "fa": "روند درآمد و سود"},
    "chart.daily_production": {"en": "Actual vs. Planned Production (Last 30 Days)", "fa": "تولید واقعی در مقابل برنامه‌ریزی شده (۳۰ روز اخیر)"},
    "chart.production_comparison": {"en": "Production Comparison by Factory", "fa": "مقایسه تولید کارخانه‌ها"},
    "chart.revenue_by_factory": {"en": "Revenue & Profit by Factory", "fa": "درآمد و سود به تفکیک کارخانه"},
    "chart.revenue_by_product": {"en": "Product Revenue & Profit in", "fa": "درآمد و سود محصولات در"},
    "chart.cost_structure": {"en": "Cost Structure", "fa": "ساختار هزینه‌ها"},
    "chart.downtime_by_type": {"en": "Downtime by Type", "fa": "توقفات به تفکیک نوع"},
    "chart.downtime_by_factory": {"en": "Downtime by Factory", "fa": "توقفات به تفکیک کارخانه"},
    "chart.energy_by_factory": {"en": "Energy Consumption by Factory", "fa": "مصرف انرژی به تفکیک کارخانه"},
    "chart.intensity_by_product": {"en": "Energy Intensity by Product", "fa": "شدت انرژی به تفکیک محصول"},
    "chart.rejection_by_factory": {"en": "Rejection Rate by Factory", "fa": "نرخ مردودی به تفکیک کارخانه"},
    "chart.cpk_by_factory": {"en": "Cpk Index by Factory", "fa": "شاخص Cpk به تفکیک کارخانه"},
    "chart.employees_by_factory": {"en": "Employees per Factory", "fa": "تعداد پرسنل در هر کارخانه"},
    "chart.incidents_by_factory": {"en": "Safety Incidents per Factory", "fa": "تعداد حوادث کاری در هر کارخانه"},
    "chart.inventory_by_factory": {"en": "Inventory by Factory", "fa": "موجودی انبارها به تفکیک کارخانه"},
    "chart.on_time_by_factory": {"en": "Supplier On-Time Delivery Performance", "fa": "عملکرد تأمین‌کنندگان (تحویل به‌موقع)"},
    "chart.sales_by_region": {"en": "Sales by Region", "fa": "فروش به تفکیک منطقه"},
    "chart.sales_by_customer": {"en": "Sales by Customer", "fa": "فروش به تفکیک مشتری"},
    "chart.production_forecast": {"en": "Monthly Production Forecast", "fa": "پیش‌بینی تولید ماهانه"},
    # Series labels
    "series.planned": {"en": "Planned", "fa": "برنامه‌ریزی‌شده"},
    "series.actual": {"en": "Actual", "fa": "واقعی"},
    "series.revenue": {"en": "Revenue", "fa": "درآمد"},
    "series.profit": {"en": "Profit", "fa": "سود"},
    "series.downtime_hours": {"en": "Downtime hours", "fa": "ساعات توقف"},
    "series.mwh": {"en": "Consumption (MWh)", "fa": "مصرف (MWh)"},
    "series.intensity": {"en": "Intensity (kWh/ton)", "fa": "شدت (kWh/ton)"},
    "series.rejection_rate": {"en": "Rejection rate (%)", "fa": "نرخ مردودی (%)"},
    "series.cpk": {"en": "Cpk index", "fa": "شاخص Cpk"},
    "series.incidents": {"en": "Incidents", "fa": "تعداد حوادث"},
    "series.raw_material": {"en": "Raw material", "fa": "مواد اولیه"},
    "series.finished_goods": {"en": "Finished goods", "fa": "محصول نهایی"},
    "series.on_time": {"en": "On-time delivery (%)", "fa": "نرخ تحویل به‌موقع (%)"},
    "series.actual_production": {"en": "Actual production", "fa": "تولید واقعی"},
    "series.forecast_production": {"en": "Forecast production", "fa": "تولید پیش‌بینی"},
    # Categorical values
    "cost.raw_materials": {"en": "Raw Materials", "fa": "مواد اولیه"},
    "cost.energy": {"en": "Energy", "fa": "انرژی"},
    "cost.labor": {"en": "Labor", "fa": "نیروی انسانی"},
    "cost.overhead": {"en": "Overhead", "fa": "سربار"},
    "downtime.planned": {"en": "Planned", "fa": "برنامه‌ریزی‌شده"},
    "downtime.emergency": {"en": "Emergency", "fa": "اضطراری"},
    "region.Domestic": {"en": "Domestic", "fa": "داخلی"},
    "region.Export": {"en": "Export", "fa": "صادرات"},
    "unit.tons": {"en": "tons", "fa": "تن"},
    # Chat assistant
    "chat.title": {"en": "AI Assistant", "fa": "دستیار هوشمند"},
    "chat.placeholder": {"en": "Ask about the dashboard data...", "fa": "درباره داده‌های داشبورد بپرسید..."},
    "chat.send": {"en": "Send", "fa": "ارسال"},
    "chat.thinking": {"en": "Thinking...", "fa": "در حال پردازش..."},
    "chat.greeting": {
        "en": "Hello! Ask me anything about production, finance, energy or any other dashboard.",
        "fa": "سلام! هر سوالی درباره تولید، مالی، انرژی یا سایر داشبوردها دارید بپرسید.",
    },
    "chat.fallback": {
        "en": "Sorry, I couldn't get an answer right now. Please try again later.",
        "fa": "متأسفم، در حال حاضر امکان پاسخگویی وجود ندارد. لطفاً بعداً دوباره تلاش کنید.",
    },
}

MONTHS: dict[str, tuple[str, ...]] = {
    "en": ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
    "fa": ("ژانویه", "فوریه", "مارس", "آوریل", "مه", "ژوئن", "ژوئیه", "اوت", "سپتامبر", "اکتبر", "نوامبر", "دسامبر"),
}

FORECAST_STEPS: dict[str, tuple[str, ...]] = {
    "en": ("Next Month", "In 2 Months", "In 3 Months"),
    "fa": ("ماه بعد", "دو ماه بعد", "سه ماه بعد"),
}

PRIVACY_POLICY: dict[str, list[str]] = {
    "en": [
        "Your privacy is important to us. It is TOMM's policy to respect your privacy regarding any information we may collect from you across our website.",
        "We only ask for personal information when we truly need it to provide a service to you. We collect it by fair and lawful means, with your knowledge and consent.",
        "We only retain collected information for as long as necessary to provide you with your requested service.",
        "We don't share any personally identifying information publicly or with third-parties, except when required to by law.",
        "This policy is effective as of 1 December 2024.",
    ],
    "fa": [
        "حریم خصوصی شما برای ما مهم است. این سیاست TOMM است که به حریم خصوصی شما در مورد هرگونه اطلاعاتی که ممکن است از شما در وب سایت خود جمع آوری کنیم، احترام بگذاریم.",
        "ما فقط زمانی اطلاعات شخصی را درخواست می کنیم که واقعاً برای ارائه خدمات به شما به آن نیاز داشته باشیم و آن را با اطلاع و رضایت شما جمع آوری می کنیم.",
        "ما اطلاعات جمع آوری شده را فقط تا زمانی که برای ارائه خدمات درخواستی شما ضروری است، نگهداری می کنیم.",
        "ما هیچ گونه اطلاعات شناسایی شخصی را به صورت عمومی یا با اشخاص ثالث به اشتراک نمی گذاریم، مگر در مواردی که قانون ایجاب کند.",
        "این سیاست از تاریخ ۱ دسامبر ۲۰۲۴ لازم الاجرا است.",
    ],
}


def _lang(language: Language | str) -> str:
    return Language.parse(language.value if isinstance(language, Language) else language).value


def t(key: str, language: Language | str) -> str:
    """Translate `key`; unknown keys are returned as-is."""
    entry = TEXT.get(key)
    if not entry:
        return key
    return entry.get(_lang(language)) or entry.get("en") or key


def page_title(page: Page, language: Language | str) -> str:
    return t(f"title.{page.value}", language)


def menu_label(page: Page, language: Language | str) -> str:
    return t(f"menu.{page.value}", language)


def month_label(period: str, language: Language | str) -> str:
    """'2024-11' -> 'Nov 2024' / 'نوامبر 2024'. Non-period strings pass through."""
    try:
        year, month = str(period).split("-")[:2]
        name = MONTHS[_lang(language)][int(month) - 1]
    except (ValueError, IndexError):
        return str(period)
    return f"{name} {year}"
