import os
from checkpoint import create_app
from checkpoint.utils.login_sweeper import LoginAttemptSweeper


if __name__ == '__main__':
    # Determine the environment
    env = os.getenv('FLASK_ENV', 'development')

    # Create the Flask app with appropriate configuration
    app = create_app(env)

    # Initialize and start the login attempt sweeper
    guards = app.extensions['checkpoint']['guards'].values()
    sweeper = LoginAttemptSweeper(guards, app.config['LOGIN_SWEEP_INTERVAL_SECONDS'])
    sweeper.start()

    # Print startup information
    print(f"Starting checkpoint application in {env} mode...")
    print("Guard API: http://localhost:3000/api/guard/scan/<QR ID>")

    port = int(os.getenv('PORT', 3000))
    try:
        if env == 'development':
            app.run(debug=True, host='0.0.0.0', port=port, use_reloader=False)
        else:
            # In production, don't use Flask's development server
            print("Production mode - use a production WSGI server like Gunicorn")
            # For local testing of production config only:
            app.run(debug=False, host='0.0.0.0', port=port)
    finally:
        # Clean up sweeper on exit
        sweeper.stop()
