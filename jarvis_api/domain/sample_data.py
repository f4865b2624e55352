"""Canonical showcase catalogue inserted by the sample-data initializer."""

SAMPLE_PRODUCTS = (
    {
        "name": "JARVIS AI Assistant",
        "description": (
            "Advanced AI assistant with voice recognition and natural language processing "
            "capabilities for seamless human-computer interaction."
        ),
        "price": 2999,
        "image": "https://images.unsplash.com/photo-1485827404703-89b55fcc595e?w=400&h=300&fit=crop",
        "category": "AI Technology",
        "features": [
            "Voice Recognition",
            "Natural Language Processing",
            "Smart Home Integration",
            "Real-time Analytics",
            "Cloud Synchronization",
        ],
    },
    {
        "name": "Holographic Display Pro",
        "description": (
            "Next-generation holographic display technology for immersive 3D experiences "
            "and advanced data visualization."
        ),
        "price": 4999,
        "image": "https://images.unsplash.com/photo-1518709268805-4e9042af2176?w=400&h=300&fit=crop",
        "category": "Display Technology",
        "features": [
            "3D Holographic Projection",
            "Touch Interface",
            "Wireless Connectivity",
            "4K Resolution",
            "Multi-angle Viewing",
        ],
    },
    {
        "name": "Neural Interface X1",
        "description": (
            "Revolutionary brain-computer interface for direct neural control of devices "
            "with medical-grade safety standards."
        ),
        "price": 9999,
        "image": "https://images.unsplash.com/photo-1559757148-5c350d0d3c56?w=400&h=300&fit=crop",
        "category": "Neural Technology",
        "features": [
            "Neural Signal Processing",
            "Wireless Data Transfer",
            "Real-time Feedback",
            "Medical Grade Safety",
            "Adaptive Learning",
        ],
    },
    {
        "name": "Quantum Processor Core",
        "description": (
            "Ultra-fast quantum processing unit with crystalline architecture for "
            "unprecedented computational performance."
        ),
        "price": 15999,
        "image": "https://images.unsplash.com/photo-1518709268805-4e9042af2176?w=400&h=300&fit=crop",
        "category": "Quantum Computing",
        "features": [
            "Quantum Entanglement",
            "Superposition Processing",
            "Error Correction",
            "Cryogenic Cooling",
            "Scalable Architecture",
        ],
    },
)

SAMPLE_FAQS = (
    {
        "question": "What is QuantumPulse technology?",
        "answer": (
            "QuantumPulse is an advanced AI system that combines quantum computing, machine "
            "learning, and neural interfaces to create seamless human-computer interaction experiences."
        ),
        "category": "technology",
    },
    {
        "question": "How secure is the neural interface?",
        "answer": (
            "Our neural interfaces use military-grade encryption and are FDA approved. All data is "
            "processed locally with optional cloud backup using end-to-end encryption."
        ),
        "category": "security",
    },
    {
        "question": "What's the warranty on holographic displays?",
        "answer": (
            "All holographic displays come with a 3-year warranty covering hardware defects and "
            "software updates. Extended warranty options are available for enterprise customers."
        ),
        "category": "warranty",
    },
    {
        "question": "Can I integrate QuantumPulse with my smart home?",
        "answer": (
            "Yes, QuantumPulse is compatible with all major smart home platforms including Alexa, "
            "Google Home, Apple HomeKit, and custom IoT solutions."
        ),
        "category": "integration",
    },
    {
        "question": "What are the system requirements?",
        "answer": (
            "Minimum requirements include 16GB RAM, dedicated GPU, and high-speed internet "
            "connection. Specific requirements vary by product configuration."
        ),
        "category": "technical",
    },
    {
        "question": "Do you offer training and support?",
        "answer": (
            "Yes, we provide comprehensive training programs, 24/7 technical support, and "
            "dedicated account management for enterprise customers."
        ),
        "category": "support",
    },
)
