from __future__ import annotations

from intake.domain.entities.catalog_option import LanguageOption, PaymentOption, ServiceOption

FALLBACK_LANGUAGE = "en"

LANGUAGE_OPTIONS: tuple[LanguageOption, ...] = (
    LanguageOption(language_id="en", label="English", emoji="🇬🇧", operator="Jacob"),
    LanguageOption(language_id="de", label="German", emoji="🇩🇪", operator="Jacob"),
    LanguageOption(language_id="es", label="Spanish", emoji="🇪🇸", operator="Jacob"),
    LanguageOption(language_id="ru", label="Russian", emoji="🇷🇺", operator="Vladislav"),
    LanguageOption(language_id="uk", label="Ukrainian", emoji="🇺🇦", operator="Vladislav"),
)

SERVICE_OPTIONS: tuple[ServiceOption, ...] = (
    ServiceOption(service_id="video_call", label="Video Call", emoji="📹"),
    ServiceOption(service_id="tuning", label="Tuning", emoji="🔧"),
    ServiceOption(service_id="customs", label="Customs Declaration", emoji="🏛"),
    ServiceOption(service_id="logistics", label="Logistics", emoji="🚛"),
)

PAYMENT_OPTIONS: tuple[PaymentOption, ...] = (
    PaymentOption(payment_id="eur", label="EUR", emoji="💶"),
    PaymentOption(payment_id="usd", label="USD", emoji="💵"),
    PaymentOption(payment_id="crypto", label="Cryptocurrency", emoji="₿"),
)

OPERATOR_LINKS: dict[str, str] = {
    "Jacob": "https://t.me/GHub_International_Jakob",
    "Vladislav": "https://t.me/Vlad_GHub_International",
}

# Sent before a language is known, so they are not localized.
WELCOME_MESSAGES: tuple[str, ...] = (
    "Thank you for contacting us! 🙏\n"
    "🚗 We specialize in selling brand-new luxury vehicles with worldwide delivery, managing the entire process.",
    "Спасибо, что связались с нами! 🙏\n"
    "🚗 Мы специализируемся на продаже новых люксовых автомобилей с доставкой по всему миру, управляя всем процессом.",
)

LANGUAGE_QUESTION = "🌐 Which language would you prefer to use?\n\n🌐 На каком языке вы предпочитаете общаться?"


TRANSLATIONS: dict[str, dict[str, str]] = {
    "en": {
        "product_request": "🔎 Which specific vehicle are you interested in? Please enter the model and color.",
        "service_selection": "Great choice! Thank you!",
        "service_selection_title": "👉 Select the services you are interested in:",
        "payment_selection": "💳 Which payment method would you prefer?",
        "summary": "Your selections:\n\nVehicle: {vehicle}\nServices: {services}\nPayment Method: {payment}",
        "operator_info": "Your sales representative: {manager}",
        "no_services_selected": "❌ No services selected. Please select at least one service to continue.",
        "please_use_keyboard": "⚠️ Please use the menu buttons to make your selection.",
        "ask_operator": "You can ask all further questions to our manager. They will be happy to help you!",
        "rate_limited": "Please wait a moment before sending more messages.",
        "generic_error": "An error occurred. Please try again later.",
        "buttons.confirm": "Confirm Selection",
        "buttons.connect": "Connect with {manager}",
        "buttons.back": "Back",
        "buttons.services.video_call": "Video Call",
        "buttons.services.tuning": "Tuning",
        "buttons.services.customs": "Customs Declaration",
        "buttons.services.logistics": "Logistics",
        "buttons.payment.eur": "EUR",
        "buttons.payment.usd": "USD",
        "buttons.payment.crypto": "Cryptocurrency",
    },
    "de": {
        "product_request": "🔎 An welchem Fahrzeugmodell sind Sie interessiert? Bitte geben Sie das Modell und die Farbe ein.",
        "service_selection": "Ausgezeichnete Wahl! Vielen Dank!",
        "service_selection_title": "👉 Wählen Sie die gewünschten Dienstleistungen:",
        "payment_selection": "💳 Welche Zahlungsmethode bevorzugen Sie?",
        "summary": "Ihre Auswahl:\n\nFahrzeug: {vehicle}\nDienstleistungen: {services}\nZahlungsmethode: {payment}",
        "operator_info": "Ihr Verkaufsvertreter: {manager}",
        "no_services_selected": "❌ Keine Dienstleistungen ausgewählt. Bitte wählen Sie mindestens eine Dienstleistung aus, um fortzufahren.",
        "please_use_keyboard": "⚠️ Bitte verwenden Sie die Tastaturtasten für Ihre Auswahl.",
        "ask_operator": "Alle weiteren Fragen können Sie unserem Manager stellen. Er wird Ihnen gerne helfen!",
        "rate_limited": "Bitte warten Sie einen Moment, bevor Sie weitere Nachrichten senden.",
        "generic_error": "Es ist ein Fehler aufgetreten. Bitte versuchen Sie es später erneut.",
        "buttons.confirm": "Auswahl bestätigen",
        "buttons.connect": "Mit {manager} verbinden",
        "buttons.back": "Zurück",
        "buttons.services.video_call": "Videogespräch",
        "buttons.services.tuning": "Tuning",
        "buttons.services.customs": "Zollabfertigung",
        "buttons.services.logistics": "Logistik",
        "buttons.payment.eur": "EUR",
        "buttons.payment.usd": "USD",
        "buttons.payment.crypto": "Kryptowährung",
    },
    "es": {
        "product_request": "🔎 ¿Qué vehículo específico le interesa? Por favor, ingrese el modelo y el color.",
        "service_selection": "¡Excelente elección! ¡Gracias!",
        "service_selection_title": "👉 Seleccione los servicios que le interesan:",
        "payment_selection": "💳 ¿Qué método de pago prefiere?",
        "summary": "Sus selecciones:\n\nVehículo: {vehicle}\nServicios: {services}\nMétodo de pago: {payment}",
        "operator_info": "Su representante de ventas: {manager}",
        "no_services_selected": "❌ No se han seleccionado servicios. Por favor, seleccione al menos un servicio para continuar.",
        "please_use_keyboard": "⚠️ Por favor, use los botones del teclado para hacer su selección.",
        "ask_operator": "Puede hacer todas las preguntas adicionales a nuestro gerente. ¡Estará encantado de ayudarle!",
        "rate_limited": "Por favor, espere un momento antes de enviar más mensajes.",
        "generic_error": "Se produjo un error. Por favor, inténtelo de nuevo más tarde.",
        "buttons.confirm": "Confirmar selección",
        "buttons.connect": "Conectar con {manager}",
        "buttons.back": "Atrás",
        "buttons.services.video_call": "Videollamada",
        "buttons.services.tuning": "Tuning",
        "buttons.services.customs": "Declaración de aduanas",
        "buttons.services.logistics": "Logística",
        "buttons.payment.eur": "EUR",
        "buttons.payment.usd": "USD",
        "buttons.payment.crypto": "Criptomoneda",
    },
    "ru": {
        "product_request": "🔎 Какая конкретная модель автомобиля вас интересует? Пожалуйста, укажите модель и цвет.",
        "service_selection": "Отличный выбор! Спасибо!",
        "service_selection_title": "👉 Выберите интересующие вас услуги:",
        "payment_selection": "💳 Какой способ оплаты вы предпочитаете?",
        "summary": "Ваш выбор:\n\nАвтомобиль: {vehicle}\nУслуги: {services}\nСпособ оплаты: {payment}",
        "operator_info": "Ваш представитель по продажам: {manager}",
        "no_services_selected": "❌ Услуги не выбраны. Пожалуйста, выберите хотя бы одну услугу для продолжения.",
        "please_use_keyboard": "⚠️ Пожалуйста, используйте кнопки меню для выбора.",
        "ask_operator": "Все дальнейшие вопросы вы можете задать нашему менеджеру. Он будет рад вам помочь!",
        "rate_limited": "Пожалуйста, подождите немного, прежде чем отправлять новые сообщения.",
        "generic_error": "Произошла ошибка. Пожалуйста, попробуйте позже.",
        "buttons.confirm": "Подтвердить выбор",
        "buttons.connect": "Связаться с {manager}",
        "buttons.back": "Назад",
        "buttons.services.video_call": "Видеозвонок",
        "buttons.services.tuning": "Тюнинг",
        "buttons.services.customs": "Таможенное оформление",
        "buttons.services.logistics": "Логистика",
        "buttons.payment.eur": "EUR",
        "buttons.payment.usd": "USD",
        "buttons.payment.crypto": "Криптовалюта",
    },
    "uk": {
        "product_request": "🔎 Яка конкретна модель автомобіля вас цікавить? Будь ласка, вкажіть модель та колір.",
        "service_selection": "Чудовий вибір! Дякуємо!",
        "service_selection_title": "👉 Виберіть цікаві для вас послуги:",
        "payment_selection": "💳 Який спосіб оплати ви віддаєте перевагу?",
        "summary": "Ваш вибір:\n\nАвтомобіль: {vehicle}\nПослуги: {services}\nСпособ оплати: {payment}",
        "operator_info": "Ваш представник з продажів: {manager}",
        "no_services_selected": "❌ Послуги не вибрані. Будь ласка, виберіть хоча б одну послугу для продовження.",
        "please_use_keyboard": "⚠️ Будь ласка, використовуйте кнопки меню для вибору.",
        "ask_operator": "Всі подальші питання ви можете задати нашому менеджеру. Він буде радий вам допомогти!",
        "rate_limited": "Будь ласка, зачекайте трохи, перш ніж надсилати нові повідомлення.",
        "generic_error": "Сталася помилка. Будь ласка, спробуйте пізніше.",
        "buttons.confirm": "Підтвердити вибір",
        "buttons.connect": "Зв'язатися з {manager}",
        "buttons.back": "Назад",
        "buttons.services.video_call": "Відеодзвінок",
        "buttons.services.tuning": "Тюнінг",
        "buttons.services.customs": "Митне оформлення",
        "buttons.services.logistics": "Логістика",
        "buttons.payment.eur": "EUR",
        "buttons.payment.usd": "USD",
        "buttons.payment.crypto": "Криптовалюта",
    },
}
