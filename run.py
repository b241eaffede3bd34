from app import create_app
from app.config import Config
import logging
import sys
import os

# Configure logging
logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

app = create_app(Config)

if __name__ == '__main__':
    # Port from the command line overrides PORT
    port = int(sys.argv[1]) if len(sys.argv) > 1 else app.config['PORT']
    debug = os.environ.get('FLASK_DEBUG', '0') == '1'

    if app.config['ALLOW_ID_SIGN_IN']:
        logging.getLogger(__name__).warning("ALLOW_ID_SIGN_IN is enabled, /login accepts a bare user_id")

    app.run(debug=debug, host=app.config['HOST'], port=port, use_reloader=debug)
