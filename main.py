from core.imports import Flask
from core.config import Config
from core.extensions import db, jwt, swagger, cors, bcrypt, migrate, mail
from core.auth import register_jwt_callbacks
from core.log import configure_logging
from core.responses import failure
from routes.auth import auth_bp, seed_admin_account
from routes.orders import orders_bp
from routes.reviews import reviews_bp
from routes.notifications import notifications_bp, customer_notifications_bp
from routes.products import products_bp, seed_catalog
from services.notifier import Notifier
from services.mailer import Mailer



def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    configure_logging(app)

    db.init_app(app)
    jwt.init_app(app)
    swagger.init_app(app)
    cors.init_app(app)
    bcrypt.init_app(app)
    mail.init_app(app)
    migrate.init_app(app, db)
    register_jwt_callbacks(jwt)

    # side-effect ports used by the order workflow; tests swap these out
    app.extensions["storefront_notifier"] = Notifier()
    app.extensions["storefront_mailer"] = Mailer()

    app.register_blueprint(auth_bp)
    app.register_blueprint(products_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(reviews_bp)
    app.register_blueprint(notifications_bp)
    app.register_blueprint(customer_notifications_bp)

    @app.errorhandler(404)
    def not_found(e):
        return failure("Not found", 404)

    @app.errorhandler(405)
    def method_not_allowed(e):
        return failure("Method not allowed", 405)

    @app.route('/ping')
    def ping():
        return "Ping received", 200

    return app


app = create_app()


if __name__ == "__main__":
    with app.app_context():
        db.create_all()

        seed_admin_account()
        seed_catalog()

    app.run(debug=True)
