from flask import Flask, request, jsonify, Blueprint, render_template, current_app
from flask_jwt_extended import create_access_token, get_jwt_identity, JWTManager, get_jwt, verify_jwt_in_request
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.exc import IntegrityError
from flask_migrate import Migrate
from flask_bcrypt import Bcrypt
from flasgger import Swagger
from flask_mail import Mail, Message
from flask_cors import CORS
from sqlalchemy import func
from datetime import datetime, timedelta
import random
import logging
